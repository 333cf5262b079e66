# tests/unit/test_pytest_plugin.py

"""Tests for the bundled pytest plugin that writes the JSON result tree."""

import json
from typing import Any

import pytest

from mcp_test_runner.pytest_plugin import REPORT_OPTION
from mcp_test_runner.results import extract
from mcp_test_runner.testing.pytest_runner import REPORT_OPTION as RUNNER_REPORT_OPTION

PLUGIN = "mcp_test_runner.pytest_plugin"


def run_with_report(pytester: pytest.Pytester, *args: str) -> tuple[pytest.RunResult, list[dict[str, Any]]]:
    report = pytester.path / "mcp-report.json"
    result = pytester.runpytest("-p", PLUGIN, f"{REPORT_OPTION}={report}", *args)
    return result, json.loads(report.read_text(encoding="utf-8"))["files"]


def test_runner_and_plugin_agree_on_option():
    assert RUNNER_REPORT_OPTION == REPORT_OPTION


def test_tree_mirrors_files_classes_and_nested_classes(pytester: pytest.Pytester):
    pytester.makepyfile(
        test_math="""
        import pytest

        class TestAdd:
            def test_ints(self):
                assert 1 + 1 == 2

            class TestNested:
                def test_wrong(self):
                    assert 1 == 2, "expected 1 to equal 2"

        @pytest.mark.skip(reason="not today")
        def test_skipped():
            pass
        """
    )

    result, files = run_with_report(pytester)

    result.assert_outcomes(passed=1, failed=1, skipped=1)
    [math_file] = files
    assert math_file["name"] == "test_math.py"
    add_class, skipped = math_file["children"]
    assert add_class["name"] == "TestAdd"
    assert add_class["children"][0] == {"name": "test_ints", "status": "passed"}
    nested = add_class["children"][1]
    assert nested["name"] == "TestNested"
    [wrong] = nested["children"]
    assert wrong["name"] == "test_wrong"
    assert wrong["status"] == "failed"
    assert "expected 1 to equal 2" in wrong["error"]["message"]
    assert "def test_wrong" in wrong["error"]["stack"]
    assert skipped == {"name": "test_skipped", "status": "skipped"}


def test_files_keep_collection_order(pytester: pytest.Pytester):
    pytester.makepyfile(test_b="def test_b():\n    pass\n", test_a="def test_a():\n    pass\n")

    _, files = run_with_report(pytester)

    assert [f["name"] for f in files] == ["test_a.py", "test_b.py"]


def test_parametrized_items_keep_their_ids(pytester: pytest.Pytester):
    pytester.makepyfile(
        """
        import pytest

        @pytest.mark.parametrize("value", [1, 2])
        def test_p(value):
            assert value == 1
        """
    )

    _, files = run_with_report(pytester)

    statuses = {c["name"]: c["status"] for c in files[0]["children"]}
    assert statuses == {"test_p[1]": "passed", "test_p[2]": "failed"}


def test_xfail_and_teardown_errors(pytester: pytest.Pytester):
    pytester.makepyfile(
        """
        import pytest

        @pytest.fixture
        def broken_teardown():
            yield
            raise RuntimeError("teardown exploded")

        @pytest.mark.xfail(reason="known bug")
        def test_xfail():
            assert False

        def test_teardown(broken_teardown):
            pass
        """
    )

    _, files = run_with_report(pytester)

    xfail, teardown = files[0]["children"]
    assert xfail == {"name": "test_xfail", "status": "skipped"}
    assert teardown["status"] == "failed"
    assert "teardown exploded" in teardown["error"]["message"]


def test_collection_errors_become_failed_cases(pytester: pytest.Pytester):
    pytester.makepyfile(
        test_broken="import module_that_does_not_exist\n",
        test_fine="def test_fine():\n    pass\n",
    )

    _, files = run_with_report(pytester, "--continue-on-collection-errors")

    broken = files[0]
    assert broken["name"] == "test_broken.py"
    assert broken["status"] == "failed"
    assert "ImportError" in broken["error"]["message"]
    results = extract(files)
    assert [(r.name, r.status) for r in results] == [("test_broken.py", "failed"), ("test_fine", "passed")]


def test_deselected_items_are_not_reported(pytester: pytest.Pytester):
    pytester.makepyfile("def test_keep():\n    pass\n\ndef test_drop():\n    pass\n")

    _, files = run_with_report(pytester, "-k", "keep")

    assert [c["name"] for c in files[0]["children"]] == ["test_keep"]


def test_nothing_collected_writes_empty_tree(pytester: pytest.Pytester):
    _, files = run_with_report(pytester)

    assert files == []


def test_no_report_without_option(pytester: pytest.Pytester):
    pytester.makepyfile("def test_x():\n    pass\n")

    result = pytester.runpytest("-p", PLUGIN)

    result.assert_outcomes(passed=1)
    assert not list(pytester.path.glob("*.json"))
