from fnorm.config.fnorm_config import FnormConfig, DEFAULT_CONFIG_PATH

__all__ = ['FnormConfig', 'DEFAULT_CONFIG_PATH']
