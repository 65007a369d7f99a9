from dataclasses import dataclass

import eth_typing
from eth_typing import ChecksumAddress

from poolsnap.checksum_cache import get_checksum_address
from poolsnap.types.aliases import ChainId


@dataclass(slots=True, frozen=True)
class UniswapFactoryDeployment:
    address: ChecksumAddress
    deployer: ChecksumAddress | None
    pool_init_hash: str

    @property
    def pool_deployer(self) -> ChecksumAddress:
        # Some forks deploy pools from a contract separate from the factory
        return self.deployer if self.deployer is not None else self.address


@dataclass(slots=True, frozen=True)
class UniswapV3ExchangeDeployment:
    name: str
    chain_id: ChainId
    factory: UniswapFactoryDeployment


UNISWAP_V3_POOL_INIT_HASH = "0xe34f199b19b2b4f47f68442619d555527d244f78a3297ea89325f843f87b8b54"

# Mainnet DEX --------------- START
EthereumMainnetUniswapV3 = UniswapV3ExchangeDeployment(
    name="Ethereum Mainnet Uniswap V3",
    chain_id=eth_typing.ChainId.ETH,
    factory=UniswapFactoryDeployment(
        address=get_checksum_address("0x1F98431c8aD98523631AE4a59f267346ea31F984"),
        deployer=None,
        pool_init_hash=UNISWAP_V3_POOL_INIT_HASH,
    ),
)
EthereumMainnetSushiswapV3 = UniswapV3ExchangeDeployment(
    name="Ethereum Mainnet Sushiswap V3",
    chain_id=eth_typing.ChainId.ETH,
    factory=UniswapFactoryDeployment(
        address=get_checksum_address("0xbACEB8eC6b9355Dfc0269C18bac9d6E2Bdc29C4F"),
        deployer=None,
        pool_init_hash=UNISWAP_V3_POOL_INIT_HASH,
    ),
)
# ----------------------------- END

# Base DEX ------------------ START
BaseUniswapV3 = UniswapV3ExchangeDeployment(
    name="Base Uniswap V3",
    chain_id=eth_typing.ChainId.BASE,
    factory=UniswapFactoryDeployment(
        address=get_checksum_address("0x33128a8fC17869897dcE68Ed026d694621f6FDfD"),
        deployer=None,
        pool_init_hash=UNISWAP_V3_POOL_INIT_HASH,
    ),
)
BasePancakeswapV3 = UniswapV3ExchangeDeployment(
    name="Base Pancakeswap V3",
    chain_id=eth_typing.ChainId.BASE,
    factory=UniswapFactoryDeployment(
        address=get_checksum_address("0x0BFbCF9fa4f9C56B0F40a671Ad40E0805A091865"),
        deployer=get_checksum_address("0x41ff9AA7e16B8B1a8a8dc4f0eFacd93D02d071c9"),
        pool_init_hash="0x6ce8eb472fa82df5469c6ab6d485f17c3ad13c8cd7af59b3d4a8026c5ce0f7e2",
    ),
)
# ----------------------------- END

# Arbitrum DEX -------------- START
ArbitrumUniswapV3 = UniswapV3ExchangeDeployment(
    name="Arbitrum Uniswap V3",
    chain_id=eth_typing.ChainId.ARB1,
    factory=UniswapFactoryDeployment(
        address=get_checksum_address("0x1F98431c8aD98523631AE4a59f267346ea31F984"),
        deployer=None,
        pool_init_hash=UNISWAP_V3_POOL_INIT_HASH,
    ),
)
# ----------------------------- END
