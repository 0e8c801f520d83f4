from __future__ import annotations

import pytest

from aws_flow_blocks.service_models.naming import humanize, lower_camel, summarize_documentation


@pytest.mark.parametrize(
    ("identifier", "expected"),
    [
        ("DescribeStackInstance", "Describe Stack Instance"),
        ("CreateWebACL", "Create Web ACL"),
        ("TestDNSAnswer", "Test DNS Answer"),
        ("ListObjectsV2", "List Objects V2"),
        ("CreateDBClusterSnapshot", "Create DB Cluster Snapshot"),
        ("Bucket", "Bucket"),
    ],
)
def test_humanize(identifier: str, expected: str) -> None:
    assert humanize(identifier) == expected


def test_lower_camel() -> None:
    assert lower_camel("DescribeDBProxies") == "describeDBProxies"
    assert lower_camel("ListObjectsV2") == "listObjectsV2"
    assert lower_camel("") == ""


def test_summarize_documentation_keeps_first_sentence() -> None:
    doc = (
        "<p>Returns the stack instance that's associated with the specified "
        "StackSet, Amazon Web Services account, and Amazon Web Services Region.</p> "
        "<p>For a list of stack instances, use <a>ListStackInstances</a>.</p>"
    )

    assert summarize_documentation(doc) == (
        "Returns the stack instance that's associated with the specified StackSet, "
        "Amazon Web Services account, and Amazon Web Services Region."
    )


def test_summarize_documentation_unescapes_entities() -> None:
    assert summarize_documentation("<p>Keys &amp; values</p>") == "Keys & values"


@pytest.mark.parametrize("doc", [None, "", "<p></p>", "   "])
def test_summarize_documentation_empty(doc: str | None) -> None:
    assert summarize_documentation(doc) == ""
