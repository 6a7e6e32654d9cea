"""File-format and environment decoders."""

from hupconfig.decoders.base import EnvDecoder, FieldDecodeFailure, FileDecoder
from hupconfig.decoders.env_decoder import EnvironDecoder
from hupconfig.decoders.yaml_decoder import YamlFileDecoder


__all__ = [
    "EnvDecoder",
    "EnvironDecoder",
    "FieldDecodeFailure",
    "FileDecoder",
    "YamlFileDecoder",
]
