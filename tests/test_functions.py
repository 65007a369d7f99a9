import pytest
from eth_abi.exceptions import EncodingError
from eth_utils.crypto import keccak
from hexbytes import HexBytes

from poolsnap.functions import (
    create2_address,
    encode_function_calldata,
    extract_argument_types_from_function_prototype,
    function_selector,
)


def test_extract_argument_types_from_function_prototype():
    assert extract_argument_types_from_function_prototype("func()") == []
    assert extract_argument_types_from_function_prototype("func(uint256)") == [
        "uint256",
    ]
    assert extract_argument_types_from_function_prototype("func(uint256,address)") == [
        "uint256",
        "address",
    ]
    assert extract_argument_types_from_function_prototype("func(uint256,address,bytes[])") == [
        "uint256",
        "address",
        "bytes[]",
    ]


def test_extract_tuple_argument_types_from_function_prototype():
    assert extract_argument_types_from_function_prototype(
        "tryBlockAndAggregate(bool,(address,bytes)[])"
    ) == [
        "bool",
        "(address,bytes)[]",
    ]
    assert extract_argument_types_from_function_prototype(
        "func((uint256,(address,bool)),int24)"
    ) == [
        "(uint256,(address,bool))",
        "int24",
    ]


def test_function_selector():
    assert function_selector("slot0()") == HexBytes("0x3850c7bd")
    assert function_selector("liquidity()") == HexBytes("0x1a686502")
    assert function_selector("transfer(address,uint256)") == HexBytes("0xa9059cbb")


def test_encode_function_calldata():
    assert (
        encode_function_calldata(function_prototype="factory()", function_arguments=[])
        == HexBytes("0xc45a01550ceb4bc5c6b2e6f722b5033a03078f9bd6673457375ba94c26ac1cf0")[:4]
    )
    assert encode_function_calldata(function_prototype="factory()", function_arguments=None) == (
        encode_function_calldata(function_prototype="factory()", function_arguments=[])
    )
    assert encode_function_calldata(
        function_prototype="transfer(address,uint256)",
        function_arguments=[
            "0xA69babEF1cA67A37Ffaf7a485DfFF3382056e78C",
            26535330612692929974,
        ],
    ) == HexBytes(
        "0xa9059cbb000000000000000000000000a69babef1ca67a37ffaf7a485dfff3382056e78c00000000000000000000000000000000000000000000000170406e9a1f1c4db6"
    )


def test_encode_function_calldata_with_bad_arguments():
    with pytest.raises(EncodingError):
        encode_function_calldata(
            function_prototype="transfer(address,uint256)",
            function_arguments=["0xA69babEF1cA67A37Ffaf7a485DfFF3382056e78C", -1],
        )


def test_create2():
    """
    Tests taken from https://eips.ethereum.org/EIPS/eip-1014
    """

    assert (
        create2_address(
            deployer="0x0000000000000000000000000000000000000000",
            salt="0x0000000000000000000000000000000000000000000000000000000000000000",
            init_code_hash=keccak(hexstr="0x00"),
        )
        == "0x4D1A2e2bB4F88F0250f26Ffff098B0b30B26BF38"
    )
    assert (
        create2_address(
            deployer="0xdeadbeef00000000000000000000000000000000",
            salt="0x000000000000000000000000feed000000000000000000000000000000000000",
            init_code_hash=keccak(hexstr="0x00"),
        )
        == "0xD04116cDd17beBE565EB2422F2497E06cC1C9833"
    )
    assert (
        create2_address(
            deployer="0x00000000000000000000000000000000deadbeef",
            salt="0x00000000000000000000000000000000000000000000000000000000cafebabe",
            init_code_hash=keccak(hexstr="0xdeadbeef"),
        )
        == "0x60f3f640a8508fC6a86d45DF051962668E1e8AC7"
    )
