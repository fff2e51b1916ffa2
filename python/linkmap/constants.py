import re

VARIABLE_START = '$'
EXTENSION_START = '{'
EXTENSION_END = '}'
EXTENSION_SEPARATOR = ','
DIGITS = '0123456789'

LITERAL = 'literal'
VARIABLE = 'variable'
EXTENSION = 'extension'

PATTERN_VARIABLE = re.compile(r'^\$[0-9]+\Z')
PATTERN_EXTENSION = re.compile(r'^\{[^{}]*\}\Z')
PATTERN_LITERAL = re.compile(r'^[^${}]+\Z')

ENV_VAR = 'LINKMAP_CONFIG'

RULE_SEPARATOR = ' '
LINE_SEPARATOR = '\n'
YAML_EXTENSIONS = ('.yml', '.yaml')

KEY_RULES = 'rules'
KEY_INPUT = 'input'
KEY_OUTPUT = 'output'
