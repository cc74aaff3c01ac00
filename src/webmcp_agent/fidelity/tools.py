"""The four demo tools exposed to the model.

Read-only tools answer directly. ``initiateFundTransfer`` only stages a
proposal on the TransferDesk; the money moves when the user confirms it.
"""

from typing import Any, Dict, List, Optional

from webmcp_agent.llm_core.exceptions import TransferError
from webmcp_agent.llm_core.logger import get_logger
from webmcp_agent.llm_core.tools import FunctionTool, SchemaTool, Tool, ToolResult
from .accounts import AccountBook
from .performance import TIME_PERIODS, performance_for
from .surface import AppSurface, NullSurface
from .transfers import TransferDesk

logger = get_logger(__name__)

TRANSFER_STAGED_MESSAGE = "I've prepared the transfer for you. Please review and click 'Submit' to complete it."

ACCOUNT_BALANCE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "accountIdentifier": {
            "type": "string",
            "description": "The name or type of the account to query, like '401k' or 'Brokerage'.",
        }
    },
    "required": ["accountIdentifier"],
}

PORTFOLIO_PERFORMANCE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "timePeriod": {
            "type": "string",
            "description": "The desired time frame, e.g., 'YTD', '1 Year', '3 Year'.",
            "enum": list(TIME_PERIODS),
        }
    },
    "required": ["timePeriod"],
}

FUND_TRANSFER_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "fromAccount": {"type": "string", "description": "The name of the source account."},
        "toAccount": {"type": "string", "description": "The name of the destination account."},
        "amount": {"type": "number", "description": "The dollar amount to transfer."},
    },
    "required": ["fromAccount", "toAccount", "amount"],
}


def build_fidelity_tools(book: AccountBook, desk: TransferDesk, surface: Optional[AppSurface] = None) -> List[Tool]:
    """Create the demo tool set bound to one account book and transfer desk.

    Args:
        book: Accounts the tools read from.
        desk: Desk that receives staged transfers.
        surface: UI hooks. Defaults to a NullSurface.

    Returns:
        The tools, ready for ``ToolRegistry.register``.
    """
    ui: AppSurface = surface if surface is not None else NullSurface()

    def getAccountList() -> Dict[str, Any]:
        """Retrieves a list of all the user's available accounts, including their names and unique IDs."""
        accounts = [account.model_dump() for account in book.list()]
        return {"success": True, "accounts": accounts}

    async def account_balance(arguments: Dict[str, Any]) -> ToolResult:
        identifier = arguments["accountIdentifier"]
        account = book.find(identifier)
        if account is None:
            return ToolResult.failure(f"Account '{identifier}' not found.")
        ui.highlight_account(account.id)
        return ToolResult(success=True, accountName=account.name, balance=account.balance)

    async def portfolio_performance(arguments: Dict[str, Any]) -> ToolResult:
        period = arguments["timePeriod"]
        series = performance_for(period)
        ui.update_performance_chart(period, series)
        return ToolResult(
            success=True,
            message=f"Portfolio performance chart is now showing data for '{period}'.",
            totalReturn=series.total_return,
            portfolioValue=series.portfolio_value,
        )

    async def fund_transfer(arguments: Dict[str, Any]) -> ToolResult:
        source = book.find(arguments["fromAccount"])
        target = book.find(arguments["toAccount"])
        if source is None or target is None:
            logger.warning(
                f"Transfer not staged. From '{arguments['fromAccount']}' found={source is not None}, "
                f"to '{arguments['toAccount']}' found={target is not None}."
            )
            return ToolResult.failure(
                "Account(s) not found.",
                fromAccountFound=source is not None,
                toAccountFound=target is not None,
            )

        try:
            proposal = desk.stage(source, target, float(arguments["amount"]))
        except TransferError as e:
            return ToolResult.failure(str(e))

        ui.show_transfer_form(proposal)
        return ToolResult(
            success=True,
            message=TRANSFER_STAGED_MESSAGE,
            proposalId=proposal.proposal_id,
            fromAccount=proposal.from_account_name,
            toAccount=proposal.to_account_name,
            amount=proposal.amount,
        )

    return [
        FunctionTool.from_callable(getAccountList),
        SchemaTool(
            name="getAccountBalance",
            description=(
                "Gets the current total market value for a specific account identified by its name "
                "or type (e.g., 'Roth IRA', 'Brokerage')."
            ),
            input_schema=ACCOUNT_BALANCE_SCHEMA,
            executor=account_balance,
        ),
        SchemaTool(
            name="getPortfolioPerformance",
            description=(
                "Retrieves the historical investment performance data for the user's total portfolio "
                "over a given time period."
            ),
            input_schema=PORTFOLIO_PERFORMANCE_SCHEMA,
            executor=portfolio_performance,
        ),
        SchemaTool(
            name="initiateFundTransfer",
            description=(
                "Pre-fills the fund transfer form to move a specific amount of money between two of the "
                "user's Fidelity accounts. This action requires final user confirmation."
            ),
            input_schema=FUND_TRANSFER_SCHEMA,
            executor=fund_transfer,
        ),
    ]
