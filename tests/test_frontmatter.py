"""Tests for split_frontmatter()."""

import pytest
import yaml

from agent_primer.frontmatter import split_frontmatter


def test_splits_block_and_body():
    data, body = split_frontmatter("---\nname: foo\ndescription: bar\n---\n# Title\n\nText\n")
    assert data == {"name": "foo", "description": "bar"}
    assert body == "# Title\n\nText\n"


def test_no_block_returns_whole_text():
    text = "# Just markdown\n---\nname: not-frontmatter\n"
    data, body = split_frontmatter(text)
    assert data == {}
    assert body == text


def test_empty_block_is_empty_dict():
    data, body = split_frontmatter("---\n---\nbody")
    assert data == {}
    assert body == "body"


def test_unterminated_block_runs_to_end_of_file():
    data, body = split_frontmatter("---\nname: foo\ndescription: bar\n")
    assert data == {"name": "foo", "description": "bar"}
    assert body == ""


def test_crlf_line_endings():
    data, body = split_frontmatter("---\r\nname: foo\r\n---\r\nbody\r\n")
    assert data == {"name": "foo"}
    assert body == "body\r\n"


def test_non_mapping_block_is_returned_as_is():
    data, _ = split_frontmatter("---\n- a\n- b\n---\nbody")
    assert data == ["a", "b"]


def test_malformed_yaml_raises():
    with pytest.raises(yaml.YAMLError):
        split_frontmatter("---\nname: [unclosed\n---\nbody")
