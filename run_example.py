#!/usr/bin/env python3
"""
Example script demonstrating how to use pairsync.

This script shows how to:
1. Build a sync pair by hand
2. Synchronize it with a backup of the stale copy
3. Run configured pairs through the manager

Everything happens inside a scratch directory under ./example_run.
"""

import os
import sys
import time
from pathlib import Path

# Add src to Python path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent / "src"))

from pairsync.config.settings import PairConfig, SyncConfig
from pairsync.sync import LocalFileSystem, PairSyncManager, SyncFile, SyncPair, SystemClock
from pairsync.utils.logging import setup_logging


def main():
    """Main example function."""
    print("🚀 pairsync - Example Run")
    print("=" * 60)

    logger = setup_logging(log_level="INFO", log_file=Path("logs") / "example_run.log")

    root = Path("example_run")
    local_dir = root / "local"
    usb_dir = root / "usb"
    backup_dir = root / "backup"
    for directory in (local_dir, usb_dir, backup_dir):
        directory.mkdir(parents=True, exist_ok=True)

    local_file = local_dir / "notes.txt"
    usb_file = usb_dir / "notes.txt"

    try:
        usb_file.write_text("old notes\n", encoding="utf-8")
        local_file.write_text("fresh notes\n", encoding="utf-8")
        # Make the USB copy clearly older
        old = time.time() - 3600
        os.utime(usb_file, (old, old))

        print("\n🔧 Building a pair by hand...")
        pair = SyncPair(LocalFileSystem(), SystemClock(),
                        need_backup=True, backup_dir_path=str(backup_dir))
        pair.set_first_file(SyncFile(local_file))
        pair.set_second_file(SyncFile(usb_file))

        outcome = pair.synchronize()
        print(f"   Direction: {outcome.direction.value}")
        print(f"   Backup: {outcome.backup_path}")
        print(f"   USB copy now reads: {usb_file.read_text(encoding='utf-8').strip()!r}")

        print("\n🔁 Synchronizing again (should be a no-op)...")
        print(f"   Direction: {pair.synchronize().direction.value}")

        print("\n🏃 Running the same pair through the manager (dry run)...")
        config = SyncConfig(pairs=[PairConfig(
            name="notes",
            first=str(local_file),
            second=str(usb_file),
            need_backup=True,
            backup_dir=str(backup_dir),
        )])
        manager = PairSyncManager(config)
        for result in manager.run_all(dry_run=True):
            print(f"   {result['pair_name']}: {result['status']}")

        print("\n🎉 Example run completed!")
        print("\n📖 Next steps:")
        print("1. Run: python -m pairsync.cli init")
        print("2. Edit config/pairsync.yaml to list your pairs")
        print("3. Run: python -m pairsync.cli sync --dry-run")

    except Exception as e:
        print(f"❌ Error during example run: {e}")
        logger.exception("Example run failed")
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
