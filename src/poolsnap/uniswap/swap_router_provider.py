import dataclasses
import enum

from eth_typing import ChecksumAddress

from poolsnap.checksum_cache import get_checksum_address
from poolsnap.config import settings
from poolsnap.erc20 import TokenAmount
from poolsnap.exceptions import ApprovalTypeQueryFailed
from poolsnap.logging import logger
from poolsnap.types.abstract import AbstractMulticallProvider

GET_APPROVAL_TYPE_FUNCTION_PROTOTYPE = "getApprovalType(address,uint256)"
GET_APPROVAL_TYPE_RETURN_TYPES = ("uint8",)


class ApprovalType(enum.IntEnum):
    """
    The approval a token requires before the router can spend it, as reported by SwapRouter02.

    ref: https://github.com/Uniswap/swap-router-contracts/blob/main/contracts/interfaces/IApproveAndCall.sol
    """

    NOT_REQUIRED = 0
    MAX = 1
    MAX_MINUS_ONE = 2
    ZERO_THEN_MAX = 3
    ZERO_THEN_MAX_MINUS_ONE = 4


@dataclasses.dataclass(slots=True, frozen=True)
class TokenApprovalTypes:
    approval_token_in: ApprovalType
    approval_token_out: ApprovalType


class SwapRouterProvider:
    """
    Queries a swap router for the approvals required by the input and output tokens of a swap.

    Both tokens are queried in a single batch. Results are never cached.
    """

    def __init__(
        self,
        multicall_provider: AbstractMulticallProvider,
        router_address: str | None = None,
    ) -> None:
        self.multicall_provider = multicall_provider
        self.router_address: ChecksumAddress = get_checksum_address(
            router_address if router_address is not None else settings.swap_router.address
        )

    async def get_approval_type(
        self,
        token_in_amount: TokenAmount,
        token_out_amount: TokenAmount,
    ) -> TokenApprovalTypes:
        """
        Return the approval types for the input and output tokens.

        Raises `ApprovalTypeQueryFailed` unless both queries succeed with a known approval type.
        """

        multicall_results = await (
            self.multicall_provider.call_same_function_on_contract_with_multiple_params(
                address=self.router_address,
                function_prototype=GET_APPROVAL_TYPE_FUNCTION_PROTOTYPE,
                function_params=[
                    (token_in_amount.token.address, token_in_amount.amount),
                    (token_out_amount.token.address, token_out_amount.amount),
                ],
                return_types=GET_APPROVAL_TYPE_RETURN_TYPES,
            )
        )
        results = multicall_results.results

        if len(results) != 2 or not all(result.success for result in results):  # noqa: PLR2004
            logger.error(
                f"Approval type query for {token_in_amount.token} and {token_out_amount.token} "
                f"failed on router {self.router_address}"
            )
            raise ApprovalTypeQueryFailed(results=results)

        approval_types: list[ApprovalType] = []
        for result in results:
            assert result.result is not None
            (value,) = result.result
            try:
                approval_types.append(ApprovalType(value))
            except ValueError as exc:
                logger.error(f"Router {self.router_address} returned unknown approval type {value}")
                raise ApprovalTypeQueryFailed(results=results) from exc

        approval_token_in, approval_token_out = approval_types
        return TokenApprovalTypes(
            approval_token_in=approval_token_in,
            approval_token_out=approval_token_out,
        )
