import io

import pytest
import yaml

from linkmap import constants
from linkmap import exceptions
from linkmap import loader


LINKMAP = (
    'foo/posts/$1.{md,mdx} https://example.com/posts/$1\n'
    '\n'
    'foo/$1/bar/$2.{html} https://example.com/$1/$2.html\n'
)


@pytest.fixture
def linkmap_file(tmp_path):
    path = tmp_path / 'linkmap'
    path.write_text(LINKMAP)
    return str(path)


@pytest.fixture
def yaml_file(tmp_path):
    path = tmp_path / 'linkmap.yml'
    path.write_text(yaml.safe_dump({
        constants.KEY_RULES: [
            {constants.KEY_INPUT: 'foo/posts/$1.{md,mdx}',
             constants.KEY_OUTPUT: 'https://example.com/posts/$1'},
            ['foo/$1/bar/$2.{html}', 'https://example.com/$1/$2.html'],
        ]
    }))
    return str(path)


def test_parse():
    ruleset = loader.parse(LINKMAP)
    assert len(ruleset) == 2
    assert ruleset.evaluate('foo/posts/abc.md') == 'https://example.com/posts/abc'
    assert ruleset.evaluate('foo/abc/bar/xyz.html') == 'https://example.com/abc/xyz.html'


def test_parse_lines():
    assert loader.parse_lines('a/$1 b/$1\r\n\r\nc d') == [('a/$1', 'b/$1'), ('c', 'd')]
    assert loader.parse_lines('') == []


@pytest.mark.parametrize('text', (
    'a/$1',
    'a/$1 b/$1 c',
    'a/$1  b/$1',
))
def test_parse_invalid_line(text):
    with pytest.raises(exceptions.LineError):
        loader.parse(text)


def test_parse_invalid_line_number():
    with pytest.raises(exceptions.ConfigError, match='line 3'):
        loader.parse('a b\n\nbroken\n')


def test_parse_invalid_template():
    with pytest.raises(exceptions.CompileError, match='output'):
        loader.parse('a/$1 b/$1$2\n')


def test_load():
    ruleset = loader.load(io.StringIO(LINKMAP))
    assert ruleset.evaluate('foo/posts/yyz.mdx') == 'https://example.com/posts/yyz'


def test_load_file(linkmap_file):
    ruleset = loader.load_file(linkmap_file)
    assert len(ruleset) == 2
    assert ruleset.evaluate('foo/abc/bar/xyz.html') == 'https://example.com/abc/xyz.html'


def test_load_yaml_file(yaml_file):
    ruleset = loader.load_file(yaml_file)
    assert len(ruleset) == 2
    assert ruleset.evaluate('foo/posts/abc.md') == 'https://example.com/posts/abc'
    assert ruleset.evaluate('foo/abc/bar/xyz.html') == 'https://example.com/abc/xyz.html'


def test_load_yaml_mapping():
    ruleset = loader.load_yaml({constants.KEY_RULES: {'a/$1': 'b/$1'}})
    assert ruleset.evaluate('a/x') == 'b/x'


@pytest.mark.parametrize('data', (
    None,
    [],
    {'templates': {}},
    {constants.KEY_RULES: [{constants.KEY_INPUT: 'a/$1'}]},
    {constants.KEY_RULES: [['a/$1']]},
    {constants.KEY_RULES: ['a/$1 b/$1']},
    {constants.KEY_RULES: [['a/$1', 1]]},
    {constants.KEY_RULES: {'a/$1': 5}},
    {constants.KEY_RULES: {'a/$1': None}},
    {constants.KEY_RULES: 5},
))
def test_load_yaml_fail(data):
    with pytest.raises(exceptions.ConfigError):
        loader.load_yaml(data)


def test_load_file_missing(tmp_path):
    with pytest.raises(exceptions.ConfigError):
        loader.load_file(str(tmp_path / 'missing'))


def test_load_file_invalid_yaml(tmp_path):
    path = tmp_path / 'linkmap.yaml'
    path.write_text('rules: [a, b\n')
    with pytest.raises(exceptions.ConfigError):
        loader.load_file(str(path))


def test_load_from_env(monkeypatch, linkmap_file):
    monkeypatch.setenv(constants.ENV_VAR, linkmap_file)
    ruleset = loader.load_from_env()
    assert ruleset.evaluate('foo/posts/abc.md') == 'https://example.com/posts/abc'


def test_load_from_env_unset(monkeypatch):
    monkeypatch.delenv(constants.ENV_VAR, raising=False)
    with pytest.raises(exceptions.ConfigError):
        loader.load_from_env()
