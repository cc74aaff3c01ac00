"""Demo financial tool set: accounts, performance and staged transfers."""

from .accounts import Account, AccountBook, default_accounts
from .performance import PERFORMANCE_DATA, TIME_PERIODS, PerformanceSeries, performance_for
from .surface import AppSurface, NullSurface
from .tools import TRANSFER_STAGED_MESSAGE, build_fidelity_tools
from .transfers import StagedTransfer, TransferDesk, TransferStatus

__all__ = [
    "Account",
    "AccountBook",
    "default_accounts",
    "PERFORMANCE_DATA",
    "TIME_PERIODS",
    "PerformanceSeries",
    "performance_for",
    "AppSurface",
    "NullSurface",
    "TRANSFER_STAGED_MESSAGE",
    "build_fidelity_tools",
    "StagedTransfer",
    "TransferDesk",
    "TransferStatus",
]
