import asyncio

import anyio
import pytest

from models.diff import DiffStat
from models.edit import ActionInvocation, Diagnostic, EditCommand, WorkspaceEdit
from services.diff_computer import DiffComputer, gather_all, group_edits_by_uri
from services.errors import CommandExecutionError, InvalidRangeError, OverlappingEditsError

from helpers import apply_patch, replace, text_range

pytestmark = pytest.mark.anyio

APP = "git://github.com/acme/app?main#src/app.py"
README = "git://github.com/acme/app?main#README.md"


async def no_commands(diagnostic, command):
    raise AssertionError("no command should be executed")


@pytest.fixture
def computer(read_file):
    return DiffComputer(execute_action_edit_command=no_commands, read_file=read_file)


def invocation(name: str, diagnostic: Diagnostic | None = None) -> ActionInvocation:
    return ActionInvocation(action_edit_command=EditCommand(command=name), diagnostic=diagnostic)


def test_grouping_preserves_source_order():
    first = replace(APP, text_range(0, 0, 0, 6), "import sys")
    second = replace(README, text_range(0, 0, 0, 0), "<!-- -->\n").replace(
        APP, text_range(3, 4, 3, 8), "run"
    )

    grouped = group_edits_by_uri([first, second])

    assert list(grouped) == [APP, README]
    assert [e.new_text for e in grouped[APP]] == ["import sys", "run"]


async def test_empty_edits_produce_no_diffs(computer):
    file_diffs = await computer.compute_diff_from_edits([])

    assert file_diffs == []
    assert computer.compute_diff_stat(file_diffs) == DiffStat(added=0, changed=0, deleted=0)


async def test_single_edit_round_trips(computer, files):
    edit = replace(APP, text_range(4, 4, 4, 15), "print('hello')")

    [file_diff] = await computer.compute_diff_from_edits([edit])

    assert file_diff.old_path == APP
    assert file_diff.new_path == APP
    assert file_diff.patch.startswith("--- a/src/app.py\n+++ b/src/app.py\n")
    expected = "import os\n\n\ndef main():\n    print('hello')\n"
    assert apply_patch(files[APP], file_diff.patch) == expected
    assert computer.compute_diff_stat([file_diff]) == DiffStat(changed=2)


async def test_edits_from_several_workspace_edits_apply_against_original_text(computer, files):
    header = replace(APP, text_range(0, 0, 0, 0), "#!/usr/bin/env python\n")
    rename = replace(APP, text_range(3, 4, 3, 8), "run")

    [file_diff] = await computer.compute_diff_from_edits([header, rename])

    expected = "#!/usr/bin/env python\nimport os\n\n\ndef run():\n    print('hi')\n"
    assert apply_patch(files[APP], file_diff.patch) == expected


async def test_disjoint_files_do_not_interfere(computer):
    app_edit = replace(APP, text_range(0, 7, 0, 9), "sys")
    readme_edit = replace(README, text_range(2, 0, 2, 10), "More docs.")

    combined = await computer.compute_diff_from_edits([app_edit, readme_edit])
    separate = [
        *await computer.compute_diff_from_edits([app_edit]),
        *await computer.compute_diff_from_edits([readme_edit]),
    ]

    assert combined == separate
    assert [d.old_path for d in combined] == [APP, README]


async def test_overlapping_edits_are_rejected(computer):
    first = replace(APP, text_range(0, 0, 0, 9), "import sys")
    second = replace(APP, text_range(0, 7, 1, 0), "re\n")

    with pytest.raises(OverlappingEditsError, match="src/app.py"):
        await computer.compute_diff_from_edits([first, second])


async def test_out_of_bounds_range_is_rejected(computer):
    edit = replace(README, text_range(10, 0, 10, 1), "x")

    with pytest.raises(InvalidRangeError):
        await computer.compute_diff_from_edits([edit])


async def test_read_failure_fails_everything(computer):
    missing = replace("git://github.com/acme/app?main#missing.py", text_range(0, 0, 0, 0), "x")
    ok = replace(README, text_range(0, 0, 0, 0), "x")

    with pytest.raises(FileNotFoundError):
        await computer.compute_diff_from_edits([ok, missing])


async def test_edit_that_changes_nothing_yields_empty_diff(computer):
    edit = replace(README, text_range(0, 0, 0, 5), "# App")

    [file_diff] = await computer.compute_diff_from_edits([edit])

    assert file_diff.hunks == []
    assert file_diff.patch == ""


async def test_custom_path_parser(read_file):
    computer = DiffComputer(no_commands, read_file, parse_file_path=lambda uri: "custom/path.txt")
    edit = replace(README, text_range(0, 0, 0, 0), "x")

    [file_diff] = await computer.compute_diff_from_edits([edit])

    assert file_diff.patch.startswith("--- a/custom/path.txt\n+++ b/custom/path.txt\n")


async def test_compute_diff_resolves_commands(read_file):
    calls = []
    diagnostic = Diagnostic(range=text_range(0, 0, 0, 9), message="unused import")

    async def execute(diag, command):
        calls.append((diag, command.command))
        if command.command == "noop":
            return None
        return replace(APP, text_range(0, 0, 1, 0), "").to_json()

    computer = DiffComputer(execute, read_file)

    [file_diff] = await computer.compute_diff(
        [invocation("remove-import", diagnostic), invocation("noop")]
    )

    assert calls == [(diagnostic, "remove-import"), (None, "noop")]
    assert file_diff.old_path == APP
    assert computer.compute_diff_stat([file_diff]) == DiffStat(deleted=1)


async def test_compute_diff_keeps_invocation_order(read_file):
    async def execute(diagnostic, command):
        # Finish in reverse order of invocation
        await asyncio.sleep(0.02 if command.command == "readme" else 0)
        uri = README if command.command == "readme" else APP
        return replace(uri, text_range(0, 0, 0, 0), "x").to_json()

    computer = DiffComputer(execute, read_file)

    file_diffs = await computer.compute_diff([invocation("readme"), invocation("app")])

    assert [d.old_path for d in file_diffs] == [README, APP]


async def test_compute_diff_runs_commands_concurrently(read_file):
    started = {"a": asyncio.Event(), "b": asyncio.Event()}

    async def execute(diagnostic, command):
        other = "b" if command.command == "a" else "a"
        started[command.command].set()
        await started[other].wait()
        return None

    computer = DiffComputer(execute, read_file)

    with anyio.fail_after(1):
        assert await computer.compute_diff([invocation("a"), invocation("b")]) == []


async def test_command_failure_aborts_the_batch(read_file):
    cancelled = asyncio.Event()

    async def execute(diagnostic, command):
        if command.command == "broken":
            raise CommandExecutionError("broken failed")
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    computer = DiffComputer(execute, read_file)

    with pytest.raises(CommandExecutionError, match="broken failed"):
        await computer.compute_diff([invocation("slow"), invocation("broken")])
    assert cancelled.is_set()


async def test_gather_all_returns_results_in_order():
    async def value(v, delay):
        await asyncio.sleep(delay)
        return v

    assert await gather_all([value(1, 0.02), value(2, 0)]) == [1, 2]
    assert await gather_all([]) == []


def test_workspace_edit_round_trip_through_descriptor():
    edit = replace(APP, text_range(0, 0, 0, 0), "x")
    assert WorkspaceEdit.from_json(edit.to_json()) == edit
