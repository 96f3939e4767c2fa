# Config module
from outfit_service.config.settings import get_settings, reload_settings, Settings
from outfit_service.config.llm_config import (
    LLMRole,
    OpenAIConfig,
    ActiveLLMConfig,
    get_llm_config,
    reset_llm_config,
    get_all_configs_dict,
)
