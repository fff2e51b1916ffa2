import logging
import os

import yaml

from linkmap import constants
from linkmap import exceptions
from linkmap.ruleset import RuleSet

logger = logging.getLogger(__name__)


def parse(text):
    """
    Parses the contents of a linkmap file. Each non-empty line is a rule of
    an input and output template separated by a single space, eg,

        content/posts/$1.{md,mdx} https://example.com/posts/$1

    :raise LineError: if a line does not contain exactly two templates
    :raise CompileError: if a template fails to compile
    :param str  text:
    :rtype: RuleSet
    """
    return RuleSet.from_pairs(parse_lines(text))


def parse_lines(text):
    """
    :raise LineError: if a line does not contain exactly two templates
    :param str  text:
    :rtype: list[tuple[str, str]]
    """
    pairs = []
    skipped = 0
    for lineno, line in enumerate(text.split(constants.LINE_SEPARATOR), 1):
        # Tolerate files saved with windows line endings
        line = line.rstrip('\r')
        if not line:
            skipped += 1
            continue
        parts = line.split(constants.RULE_SEPARATOR)
        if len(parts) != 2:
            raise exceptions.LineError(
                'Invalid line {}: {!r}. Expected "<input> <output>"'.format(lineno, line)
            )
        pairs.append(tuple(parts))

    logger.debug('Parsed %d rules, skipped %d empty lines', len(pairs), skipped)
    return pairs


def load(stream):
    """
    :param stream: Readable text stream of a linkmap file
    :rtype: RuleSet
    """
    return parse(stream.read())


def load_yaml(data):
    """
    Builds a RuleSet from a loaded yaml document. Rules are given under the
    'rules' key, either as a mapping of input to output templates, or as a
    list of [input, output] pairs or {input: ..., output: ...} mappings.

    :raise ConfigError: if the document is not a valid rule configuration
    :param dict data:
    :rtype: RuleSet
    """
    if not isinstance(data, dict) or constants.KEY_RULES not in data:
        raise exceptions.ConfigError(
            'Rule configuration must be a mapping with a {!r} key'.format(constants.KEY_RULES)
        )

    rules = data[constants.KEY_RULES] or ()
    if isinstance(rules, dict):
        rules = [list(item) for item in rules.items()]
    elif not isinstance(rules, (list, tuple)):
        raise exceptions.ConfigError(
            'Rules must be a mapping or a list: {!r}'.format(rules)
        )

    pairs = []
    for rule in rules:
        if isinstance(rule, dict):
            try:
                pair = (rule[constants.KEY_INPUT], rule[constants.KEY_OUTPUT])
            except KeyError as e:
                raise exceptions.ConfigError('Rule {!r} is missing key: {}'.format(rule, e))
        elif isinstance(rule, (list, tuple)) and len(rule) == 2:
            pair = tuple(rule)
        else:
            raise exceptions.ConfigError('Invalid rule configuration: {!r}'.format(rule))
        if not all(isinstance(text, str) for text in pair):
            raise exceptions.ConfigError('Rule templates must be strings: {!r}'.format(rule))
        pairs.append(pair)
    return RuleSet.from_pairs(pairs)


def load_file(path):
    """
    Loads a RuleSet from a linkmap file, or a yaml file if the path has a
    .yml/.yaml extension.

    :raise ConfigError: if the file does not exist or is invalid
    :param str  path:
    :rtype: RuleSet
    """
    if not os.path.isfile(path):
        raise exceptions.ConfigError('Linkmap file does not exist: {}'.format(path))

    logger.debug('Loading rules from %s', path)
    with open(path) as f:
        if os.path.splitext(path)[1].lower() in constants.YAML_EXTENSIONS:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise exceptions.ConfigError('Invalid yaml in {}: {}'.format(path, e))
            ruleset = load_yaml(data)
        else:
            ruleset = load(f)

    logger.debug('Loaded %d rules from %s', len(ruleset), path)
    return ruleset


def load_from_env(env_var=constants.ENV_VAR):
    """
    Loads the RuleSet from the file named by an environment variable

    :raise ConfigError: if the environment variable is not set
    :param str  env_var:
    :rtype: RuleSet
    """
    path = os.getenv(env_var)
    if not path:
        raise exceptions.ConfigError('Environment variable {} is not set'.format(env_var))
    return load_file(path)
