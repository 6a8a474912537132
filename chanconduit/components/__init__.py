"""External collaborators of the channel filters."""

from .anode import COLLECTION_PLANE, AnodePlane, MappedAnodePlane
from .noisedb import ChannelNoiseDatabase, ChannelNoiseInfo, OmniChannelNoiseDB
from .registry import ComponentRegistry

__all__ = [
    "AnodePlane",
    "MappedAnodePlane",
    "COLLECTION_PLANE",
    "ChannelNoiseDatabase",
    "ChannelNoiseInfo",
    "OmniChannelNoiseDB",
    "ComponentRegistry",
]
