from ._config import Config, get_config, set_config

__all__ = ["Config", "get_config", "set_config"]
