from .yaml_parser import YamlParser, yaml_parser
from .validator import MetaValidator, check_meta
from .decoder import decode_meta, read_meta, read_meta_file
from .encoder import dump_meta, encode_meta

__all__ = [
    "YamlParser",
    "yaml_parser",
    "MetaValidator",
    "check_meta",
    "decode_meta",
    "read_meta",
    "read_meta_file",
    "dump_meta",
    "encode_meta",
]
