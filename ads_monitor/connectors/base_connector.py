"""
Base connector class for upstream reporting sources
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence
from datetime import datetime, timezone
from ads_monitor.models.metrics import AccountFetchResult
from ads_monitor.utils.logger import log
import time


class BaseConnector(ABC):
    """
    Base class for reporting connectors.

    Subclasses fetch one report per account; ``sync`` fans the accounts out
    and keeps connector-level bookkeeping. No retries: a failed account stays
    failed for the rest of the cycle.
    """

    def __init__(self, name: str):
        self.name = name
        self.last_sync = None
        self.sync_count = 0
        self.error_count = 0
        self.failed_account_count = 0

    @abstractmethod
    async def fetch_accounts(self, account_ids: Sequence[str]) -> List[AccountFetchResult]:
        """Fetch today's report for every account, one result per account id"""
        pass

    async def sync(self, account_ids: Sequence[str]) -> List[AccountFetchResult]:
        """
        Run one fetch cycle with logging and bookkeeping.

        Per-account failures come back as ``AccountFetchFailed`` values.
        Anything raised here escaped that isolation and is re-raised to the
        caller as a whole-cycle fault.

        Args:
            account_ids: Accounts to fetch, in display order

        Returns:
            One AccountFetchResult per account id, same order
        """
        log.info(f"Starting sync for {self.name} ({len(account_ids)} accounts)")
        start_time = time.time()

        try:
            results = await self.fetch_accounts(account_ids)
        except Exception as e:
            self.error_count += 1
            log.error(f"Sync failed for {self.name}: {type(e).__name__}: {e}")
            raise

        self.last_sync = datetime.now(timezone.utc)
        self.sync_count += 1
        failed = [r.account_id for r in results if not r.ok]
        self.failed_account_count += len(failed)

        elapsed = time.time() - start_time
        if failed:
            log.warning(
                f"Sync completed for {self.name} in {elapsed:.2f}s "
                f"({len(failed)}/{len(results)} accounts failed: {', '.join(failed)})"
            )
        else:
            log.info(f"Sync completed for {self.name} in {elapsed:.2f}s")

        return results

    def get_status(self) -> Dict[str, Any]:
        """Get connector status"""
        return {
            "name": self.name,
            "last_sync": self.last_sync,
            "sync_count": self.sync_count,
            "error_count": self.error_count,
            "failed_account_count": self.failed_account_count,
            "error_rate": self.error_count / max(self.sync_count, 1),
        }
