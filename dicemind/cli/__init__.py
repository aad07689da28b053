# Shortcut imports
from .utils import (  # noqa
    add_common_arguments,
    enumerate_configs,
    find_config,
    load_settings,
    red,
)
