from .config import Config, Unset
from .feeder import CallableFeeder, Feeder, MapFeeder, OsFeeder
from .lookup import lookup

__all__ = ["Config", "Unset", "CallableFeeder", "Feeder", "MapFeeder", "OsFeeder", "lookup"]
