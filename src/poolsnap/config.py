from pathlib import Path
from typing import Annotated

import tomlkit
from pydantic import (
    AfterValidator,
    BaseModel,
    Field,
    HttpUrl,
    WebsocketUrl,
    field_validator,
)
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from poolsnap.checksum_cache import get_checksum_address
from poolsnap.constants import MULTICALL3_ADDRESS, SWAP_ROUTER_02_ADDRESS
from poolsnap.logging import logger
from poolsnap.types.aliases import ChainId

CONFIG_DIR = Path.home() / ".config" / "poolsnap"
CONFIG_FILE = CONFIG_DIR / "config.toml"

type ConfiguredAddress = Annotated[str, AfterValidator(get_checksum_address)]


class CacheSettings(BaseModel):
    # Pool addresses never change for a given token pair and fee, so the TTL only bounds memory
    pool_address_ttl: float = Field(default=3600.0, gt=0)


class MulticallSettings(BaseModel):
    address: ConfiguredAddress = MULTICALL3_ADDRESS


class SwapRouterSettings(BaseModel):
    address: ConfiguredAddress = SWAP_ROUTER_02_ADDRESS


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="POOLSNAP_",
        env_nested_delimiter="__",
        toml_file=CONFIG_FILE,
    )

    cache: CacheSettings = CacheSettings()
    multicall: MulticallSettings = MulticallSettings()
    swap_router: SwapRouterSettings = SwapRouterSettings()
    rpc: dict[
        ChainId,
        HttpUrl | WebsocketUrl | Path,
    ] = {}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Highest priority first: explicit arguments, then the environment, then the TOML file
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )

    @field_validator("rpc", mode="after")
    def validate_paths(
        cls,  # noqa: N805
        rpc_dict: dict[ChainId, HttpUrl | WebsocketUrl | Path],
    ) -> dict[ChainId, HttpUrl | WebsocketUrl | Path]:
        """
        Validate the endpoints.

        This will convert all file paths to an absolute reference, leaving HTTP and WS URLs as-is.
        """

        return {
            chain_id: endpoint.expanduser().absolute() if isinstance(endpoint, Path) else endpoint
            for chain_id, endpoint in rpc_dict.items()
        }


def load_config_from_file(config_path: Path) -> Settings:
    """
    Load settings from the TOML file at `config_path`. `POOLSNAP_` environment variables override
    values from the file.
    """

    class FileSettings(Settings):
        model_config = SettingsConfigDict(toml_file=config_path)

    return Settings.model_validate(FileSettings().model_dump())


def save_config_to_file(config: Settings, config_path: Path = CONFIG_FILE) -> None:
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        tomlkit.dumps(
            config.model_dump(mode="json"),
        ),
    )
    logger.info(f"Saved configuration to {config_path}.")


# Reads CONFIG_FILE when it exists
settings = Settings()
if CONFIG_FILE.exists():
    logger.debug(f"Loaded configuration from {CONFIG_FILE}.")
