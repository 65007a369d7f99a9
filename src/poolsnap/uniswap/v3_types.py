import pydantic

from poolsnap.validation.evm_values import (
    ValidatedInt24,
    ValidatedUint8,
    ValidatedUint16,
    ValidatedUint128,
    ValidatedUint160,
)

type Liquidity = int
type SqrtPriceX96 = int
type Tick = int

SLOT0_FUNCTION_PROTOTYPE = "slot0()"
SLOT0_RETURN_TYPES = ("uint160", "int24", "uint16", "uint16", "uint16", "uint8", "bool")
LIQUIDITY_FUNCTION_PROTOTYPE = "liquidity()"
LIQUIDITY_RETURN_TYPES = ("uint128",)


class UniswapV3Slot0(pydantic.BaseModel, frozen=True):
    sqrt_price_x96: ValidatedUint160
    tick: ValidatedInt24
    observation_index: ValidatedUint16
    observation_cardinality: ValidatedUint16
    observation_cardinality_next: ValidatedUint16
    fee_protocol: ValidatedUint8
    unlocked: bool

    @classmethod
    def from_call_result(
        cls,
        result: tuple[int, int, int, int, int, int, bool],
    ) -> "UniswapV3Slot0":
        (
            sqrt_price_x96,
            tick,
            observation_index,
            observation_cardinality,
            observation_cardinality_next,
            fee_protocol,
            unlocked,
        ) = result
        return cls(
            sqrt_price_x96=sqrt_price_x96,
            tick=tick,
            observation_index=observation_index,
            observation_cardinality=observation_cardinality,
            observation_cardinality_next=observation_cardinality_next,
            fee_protocol=fee_protocol,
            unlocked=unlocked,
        )


class UniswapV3Liquidity(pydantic.BaseModel, frozen=True):
    liquidity: ValidatedUint128
