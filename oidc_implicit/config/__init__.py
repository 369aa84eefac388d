"""Imports manager"""

from .const import *  # noqa: F403
from .schema import SETTINGS_SCHEMA as SETTINGS_SCHEMA
from .settings import Settings as Settings
