"""Tests for app/structure.py"""
import pytest
from structure import StructuralIndex, HeadingEntry, build_index


NOTE = """---
title: Sample
tags:
  - demo
# yaml comment, not a heading
---
# Top
Intro line ^intro

## Details ##
- item one ^item1
  - nested ^nested

```python
# not a heading
x = 1  ^incode
```

A paragraph
^para
### Deep
"""


@pytest.fixture()
def index():
    return build_index(NOTE)


def test_headings_in_order_with_levels(index):
    assert [(h.heading, h.level, h.line) for h in index.headings] == [
        ("Top", 1, 6),
        ("Details", 2, 9),
        ("Deep", 3, 20),
    ]


def test_headings_skip_front_matter_and_code(index):
    names = [h.heading for h in index.headings]
    assert "yaml comment, not a heading" not in names
    assert "not a heading" not in names


def test_blocks(index):
    assert index.blocks["intro"].line == 7
    assert index.blocks["item1"].line == 10
    assert index.blocks["nested"].line == 11
    assert "incode" not in index.blocks


def test_block_on_own_line_points_at_paragraph(index):
    assert index.blocks["para"].line == 18


def test_find_heading_case_insensitive(index):
    assert index.find_heading("details").line == 9
    assert index.find_heading("DEEP").level == 3
    assert index.find_heading("missing") is None


def test_find_heading_first_match_wins():
    idx = StructuralIndex(headings=[
        HeadingEntry(heading="Same", level=2, line=1),
        HeadingEntry(heading="same", level=1, line=5),
    ])
    assert idx.find_heading("SAME").line == 1


def test_first_block_anchor_wins():
    idx = build_index("one ^dup\ntwo ^dup\n")
    assert idx.blocks["dup"].line == 0


def test_no_front_matter():
    idx = build_index("# Title\ntext\n")
    assert idx.headings[0].line == 0


def test_front_matter_is_not_parsed_as_yaml():
    idx = build_index("---\n: : bad: [\n---\n# Title\n")
    assert not hasattr(idx, "frontmatter")
    assert [(h.heading, h.line) for h in idx.headings] == [("Title", 3)]


def test_heading_requires_space_after_hashes():
    idx = build_index("#tag line\n####### seven\n## Real\n")
    assert [h.heading for h in idx.headings] == ["Real"]


def test_crlf_lines():
    idx = build_index("# One\r\nText ^b1\r\n")
    assert idx.headings[0].heading == "One"
    assert idx.blocks["b1"].line == 1


def test_own_line_anchor_after_fence_points_at_closing_fence():
    idx = build_index("```\ncode\n```\n^snippet\n")
    assert idx.blocks["snippet"].line == 2


def test_own_line_anchor_after_tilde_fence():
    idx = build_index("Intro\n~~~~\none\ntwo\n~~~~\n\n^tail\n")
    assert idx.blocks["tail"].line == 4
