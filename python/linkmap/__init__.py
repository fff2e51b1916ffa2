from linkmap.exceptions import (
    CompileError,
    ConfigError,
    LineError,
    LinkMapError,
    NoMatchError,
    ParseError,
    RenderError,
    RuleValidationError,
)
from linkmap.loader import load, load_file, load_from_env, parse
from linkmap.ruleset import Rule, RuleSet
from linkmap.template import Template, compile

__version__ = '0.1.0'
