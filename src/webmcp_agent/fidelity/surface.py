"""The UI hooks the demo tools call. Rendering itself lives outside the engine."""

from typing import Protocol

from webmcp_agent.llm_core.logger import get_logger
from .performance import PerformanceSeries
from .transfers import StagedTransfer

logger = get_logger(__name__)


class AppSurface(Protocol):
    def highlight_account(self, account_id: str) -> None: ...

    def show_transfer_form(self, transfer: StagedTransfer) -> None: ...

    def update_performance_chart(self, period: str, series: PerformanceSeries) -> None: ...

    def show_notice(self, text: str) -> None: ...


class NullSurface:
    """Surface used when no UI is attached. Only logs."""

    def highlight_account(self, account_id: str) -> None:
        logger.debug("highlight_account(%s)", account_id)

    def show_transfer_form(self, transfer: StagedTransfer) -> None:
        logger.debug("show_transfer_form(%s)", transfer.proposal_id)

    def update_performance_chart(self, period: str, series: PerformanceSeries) -> None:
        logger.debug("update_performance_chart(%s, %d point(s))", period, len(series.values))

    def show_notice(self, text: str) -> None:
        logger.debug("show_notice(%s)", text)
