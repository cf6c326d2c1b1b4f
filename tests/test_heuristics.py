"""Tests for the heuristic reviewer."""

from conftest import make_patch

from pr_reviewer.models.files import ChangedFile, FileStatus
from pr_reviewer.models.findings import Finding, FindingCategory
from pr_reviewer.review.heuristics import (
    HEURISTIC_HEADER,
    NO_FINDINGS_MESSAGE,
    HeuristicReviewer,
    dedupe_findings,
    render_findings,
)


class TestLargeChange:
    """Tests for the large-change rule."""

    def test_401_added_lines_is_flagged(self):
        f = ChangedFile(path="big.py", status=FileStatus.ADDED, patch=make_patch(401))
        findings = HeuristicReviewer().review([f])

        assert len(findings) == 1
        assert findings[0].category is FindingCategory.LARGE_CHANGE
        assert findings[0].message == "File `big.py` adds 401 lines."

    def test_400_added_lines_is_not_flagged(self):
        f = ChangedFile(path="big.py", status=FileStatus.ADDED, patch=make_patch(400))
        findings = HeuristicReviewer().review([f])

        assert [x for x in findings if x.category is FindingCategory.LARGE_CHANGE] == []

    def test_plus_prefix_counts_header_lines(self):
        # "+++" starts with "+", so it counts like any other added line
        patch = "+++ b/big.py\n" + make_patch(400)
        f = ChangedFile(path="big.py", status=FileStatus.MODIFIED, patch=patch)

        assert len(HeuristicReviewer().review([f])) == 1

    def test_custom_threshold(self):
        f = ChangedFile(path="a.py", status=FileStatus.ADDED, patch=make_patch(11))
        findings = HeuristicReviewer(large_change_threshold=10).review([f])
        assert findings[0].category is FindingCategory.LARGE_CHANGE


class TestMarkers:
    """Tests for TODO and debug-print rules."""

    def test_todo_on_added_line(self, todo_file):
        findings = HeuristicReviewer().review([todo_file])

        assert len(findings) == 1
        assert findings[0].category is FindingCategory.TODO_MARKER
        assert findings[0].file == todo_file.path

    def test_todo_on_context_line_ignored(self):
        patch = "@@ -1,2 +1,2 @@\n # TODO old\n-x = 1\n+x = 2"
        f = ChangedFile(path="a.py", status=FileStatus.MODIFIED, patch=patch)
        assert HeuristicReviewer().review([f]) == []

    def test_print_call(self, print_file):
        findings = HeuristicReviewer().review([print_file])

        assert [f.category for f in findings] == [FindingCategory.DEBUG_PRINT]

    def test_one_finding_per_matching_line(self):
        patch = "+# TODO one\n+# TODO two\n+print(1)"
        f = ChangedFile(path="a.py", status=FileStatus.ADDED, patch=patch)
        findings = HeuristicReviewer().review([f])

        assert len(findings) == 3
        assert len(dedupe_findings(findings)) == 2

    def test_line_matching_both_rules(self):
        f = ChangedFile(path="a.py", status=FileStatus.ADDED, patch="+print(1)  # TODO remove")
        categories = {x.category for x in HeuristicReviewer().review([f])}
        assert categories == {FindingCategory.TODO_MARKER, FindingCategory.DEBUG_PRINT}

    def test_custom_debug_print_call(self):
        f = ChangedFile(
            path="Program.cs", status=FileStatus.ADDED, patch='+Console.WriteLine("x");'
        )
        findings = HeuristicReviewer(debug_print_call="Console.WriteLine").review([f])
        assert findings[0].message == "File `Program.cs` calls `Console.WriteLine` directly."


class TestFileSelection:
    """Tests for which files are scanned."""

    def test_skips_removed_and_renamed(self):
        patch = "+# TODO"
        files = [
            ChangedFile(path="gone.py", status=FileStatus.REMOVED, patch=patch),
            ChangedFile(path="moved.py", status=FileStatus.RENAMED, patch=patch),
            ChangedFile(path="same.py", status=FileStatus.UNCHANGED, patch=patch),
        ]
        assert HeuristicReviewer().review(files) == []

    def test_skips_files_without_patch(self, binary_file):
        assert HeuristicReviewer().review([binary_file]) == []

    def test_clean_file(self, clean_file):
        assert HeuristicReviewer().review([clean_file]) == []


class TestDedupeAndRender:
    """Tests for deduplication and rendering."""

    def test_same_file_collapses(self):
        f = ChangedFile(path="a.py", status=FileStatus.ADDED, patch="+print(1)\n+print(2)")
        findings = HeuristicReviewer().review([f])

        assert len(findings) == 2
        assert len(dedupe_findings(findings)) == 1

    def test_different_files_stay_separate(self):
        files = [
            ChangedFile(path="a.py", status=FileStatus.ADDED, patch="+print(1)"),
            ChangedFile(path="b.py", status=FileStatus.ADDED, patch="+print(1)"),
        ]
        findings = dedupe_findings(HeuristicReviewer().review(files))
        assert [f.file for f in findings] == ["a.py", "b.py"]

    def test_identical_messages_collapse_across_files(self):
        findings = [
            Finding(category=FindingCategory.DEBUG_PRINT, file="a.py", message="same"),
            Finding(category=FindingCategory.DEBUG_PRINT, file="b.py", message="same"),
        ]
        assert len(dedupe_findings(findings)) == 1

    def test_render_numbered_with_suggestions(self):
        findings = [
            Finding(category=FindingCategory.TODO_MARKER, file="a.py", message="todo in a"),
            Finding(category=FindingCategory.LARGE_CHANGE, file="b.py", message="big b"),
            Finding(category=FindingCategory.TODO_MARKER, file="a.py", message="todo in a"),
        ]
        body = render_findings(findings)

        assert body.startswith(HEURISTIC_HEADER)
        assert "1. todo in a" in body
        assert "2. big b" in body
        assert "3." not in body
        assert "tracked issue" in body
        assert "splitting this PR" in body

    def test_render_empty(self):
        assert render_findings([]) == NO_FINDINGS_MESSAGE
