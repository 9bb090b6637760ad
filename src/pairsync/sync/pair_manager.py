"""Runs configured sync pairs one after another."""

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config.settings import PairConfig, SyncConfig
from ..utils.file_utils import FileHelper
from ..utils.logging import ContextualLogger, TimedOperation
from .clock import Clock, SystemClock
from .gateway import FileSystemGateway, LocalFileSystem
from .pair import SyncPair
from .sync_file import SyncFile

# Module logger
logger = logging.getLogger(__name__)


class PairSyncManager:
    """Builds sync pairs from configuration and runs them sequentially.

    Each pair is independent: a failing pair is recorded in its result and the
    manager moves on to the next one.
    """

    def __init__(
        self,
        config: SyncConfig,
        gateway: Optional[FileSystemGateway] = None,
        clock: Optional[Clock] = None,
    ):
        """Initialize the manager.

        Args:
            config: Sync configuration
            gateway: Filesystem gateway, a LocalFileSystem by default
            clock: Clock for backup names, the system clock by default
        """
        self.config = config
        self.gateway = gateway or LocalFileSystem(
            atomic_replace=config.sync_options.atomic_replace
        )
        self.clock = clock or SystemClock()

    def build_pair(self, pair_config: PairConfig) -> SyncPair:
        """Create a fully attached SyncPair for a pair configuration."""
        pair = SyncPair(
            self.gateway,
            self.clock,
            need_backup=pair_config.need_backup,
            backup_dir_path=pair_config.backup_dir,
            mtime_tolerance=self.config.sync_options.mtime_tolerance,
            name=pair_config.name,
        )
        pair.set_first_file(SyncFile(pair_config.first))
        pair.set_second_file(SyncFile(pair_config.second))
        return pair

    def run_pair(self, pair_config: PairConfig, dry_run: bool = False) -> Dict[str, Any]:
        """Synchronize one pair.

        Args:
            pair_config: Pair to synchronize
            dry_run: Only report what would be done

        Returns:
            Dictionary with the pair's result
        """
        pair_logger = ContextualLogger(logger, {'pair': pair_config.name})
        result = {
            'pair_name': pair_config.name,
            'status': 'running',
            'direction': 'none',
            'source': None,
            'target': None,
            'backup_path': None,
            'duration': 0.0,
            'error': None,
        }

        start_time = time.time()
        try:
            with TimedOperation(pair_logger, "synchronization"):
                pair = self.build_pair(pair_config)

                if dry_run:
                    outcome = pair.plan()
                else:
                    if pair_config.need_backup and self.config.sync_options.create_backup_dir:
                        Path(pair_config.backup_dir).mkdir(parents=True, exist_ok=True)
                    outcome = pair.synchronize()

            result.update(outcome.to_dict())
            if not outcome.synced:
                result['status'] = 'unchanged'
            elif dry_run:
                result['status'] = 'planned'
                pair_logger.info(f"Would copy {outcome.source} -> {outcome.target}")
            else:
                result['status'] = 'completed'

        except Exception as e:
            result['status'] = 'failed'
            result['error'] = str(e)
            if isinstance(e, OSError):
                pair_logger.error(
                    "Files may need manual recovery: rerun the sync or restore from backup"
                )

        result['duration'] = time.time() - start_time
        return result

    def run_all(self, dry_run: bool = False) -> List[Dict[str, Any]]:
        """Synchronize every enabled pair in configuration order."""
        pairs = self.config.get_enabled_pairs()
        logger.info(f"Synchronizing {len(pairs)} pair(s)")
        return [self.run_pair(pair_config, dry_run=dry_run) for pair_config in pairs]

    def inspect_pair(self, pair_config: PairConfig, checksum: bool = False) -> Dict[str, Any]:
        """Describe a pair's current state without changing anything.

        Args:
            pair_config: Pair to inspect
            checksum: Also compare file contents

        Returns:
            Dictionary with both files' metadata and the planned direction
        """
        info = {
            'pair_name': pair_config.name,
            'first': self._file_state(pair_config.first),
            'second': self._file_state(pair_config.second),
            'direction': None,
            'identical': None,
            'error': None,
        }

        if info['first'] is None or info['second'] is None:
            info['error'] = 'file missing'
            return info

        try:
            info['direction'] = self.build_pair(pair_config).plan().direction.value
            if checksum:
                info['identical'] = (
                    FileHelper.calculate_file_hash(Path(pair_config.first))
                    == FileHelper.calculate_file_hash(Path(pair_config.second))
                )
        except Exception as e:
            logger.warning(f"Could not inspect pair '{pair_config.name}': {e}")
            info['error'] = str(e)

        return info

    @staticmethod
    def _file_state(path: str) -> Optional[Dict[str, Any]]:
        try:
            return FileHelper.get_file_info(Path(path))
        except FileNotFoundError:
            return None

    def get_summary(self, results: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Summarize a list of pair results."""
        return {
            'total_pairs': len(results),
            'synchronized': len([r for r in results if r['status'] == 'completed']),
            'planned': len([r for r in results if r['status'] == 'planned']),
            'unchanged': len([r for r in results if r['status'] == 'unchanged']),
            'failed': len([r for r in results if r['status'] == 'failed']),
            'total_duration': sum(r.get('duration', 0) for r in results),
        }
