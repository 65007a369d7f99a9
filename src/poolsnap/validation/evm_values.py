from typing import Annotated

from pydantic import Field

from poolsnap.constants import (
    MAX_INT24,
    MAX_UINT8,
    MAX_UINT16,
    MAX_UINT128,
    MAX_UINT160,
    MIN_INT24,
    MIN_UINT8,
    MIN_UINT16,
    MIN_UINT128,
    MIN_UINT160,
)

type ValidatedInt24 = Annotated[int, Field(strict=True, ge=MIN_INT24, le=MAX_INT24)]

type ValidatedUint8 = Annotated[int, Field(strict=True, ge=MIN_UINT8, le=MAX_UINT8)]
type ValidatedUint16 = Annotated[int, Field(strict=True, ge=MIN_UINT16, le=MAX_UINT16)]
type ValidatedUint128 = Annotated[int, Field(strict=True, ge=MIN_UINT128, le=MAX_UINT128)]
type ValidatedUint160 = Annotated[int, Field(strict=True, ge=MIN_UINT160, le=MAX_UINT160)]
