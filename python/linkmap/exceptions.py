class LinkMapError(Exception):
    """ Generic base exception for all linkmap errors """


class CompileError(LinkMapError):
    """ Failure to compile a template string """


class NoMatchError(LinkMapError):
    """ No template or rule matched a value """


class ParseError(NoMatchError):
    """ Failure to parse a value against a single template """


class RenderError(LinkMapError):
    """ Failure to render a template from its bindings """


class ConfigError(LinkMapError):
    """ Any errors raised from reading a rule configuration """


class LineError(ConfigError):
    """ Malformed line in a linkmap file """


class RuleValidationError(ConfigError):
    """ Errors with rule validation """
