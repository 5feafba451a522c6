import json

import pytest

from main import main, parse_event
from scoregrid.errors import UnknownEventError
from scoregrid.viewmodels.scoreboard_viewmodel import HeaderClick, RoundToggle

from factories import SAMPLE_PAGE


@pytest.fixture()
def page_file(tmp_path):
    path = tmp_path / "scores.html"
    path.write_text(SAMPLE_PAGE, encoding="utf-8")
    return path


def _run(capsys, *argv):
    code = main(list(argv))
    return code, capsys.readouterr()


def test_parse_event_forms():
    assert parse_event("sort:scores-table-1:3") == HeaderClick("scores-table-1", 3)
    assert parse_event("toggle:2") == RoundToggle("2")
    with pytest.raises(UnknownEventError):
        parse_event("sort:3")
    with pytest.raises(UnknownEventError):
        parse_event("reset-player:x")


def test_render_json_after_sort(fresh_services, page_file, tmp_path, capsys):
    code, out = _run(
        capsys,
        "render", str(page_file),
        "--year", "2024",
        "--config-dir", str(tmp_path),
        "--event", "sort:scores-table-1:3",
        "--json",
    )
    assert code == 0
    data = json.loads(out.out)
    assert data["row_order"]["scores-table-1"] == ["r2", "r0", "r1"]
    assert data["sort_indicators"] == {"scores-table-1": {"3": "asc"}}


def test_render_tee_time_sort_uses_dates(fresh_services, page_file, tmp_path, capsys):
    code, out = _run(
        capsys,
        "render", str(page_file),
        "--config-dir", str(tmp_path),
        "--event", "sort:scores-table-1:1",
        "--json",
    )
    assert code == 0
    assert json.loads(out.out)["row_order"]["scores-table-1"] == ["r1", "r0", "r2"]


def test_render_grid_filters_player(fresh_services, page_file, tmp_path, capsys):
    code, out = _run(
        capsys,
        "render", str(page_file),
        "--config-dir", str(tmp_path),
        "--event", "player:bob",
    )
    assert code == 0
    lines = out.out.strip().splitlines()
    assert lines[0] == "[scores-table-1]"
    assert len(lines) == 2
    assert lines[1].startswith("bob | McIlroy")


def test_render_collapse_hides_tee_times(fresh_services, page_file, tmp_path, capsys):
    code, out = _run(
        capsys,
        "render", str(page_file),
        "--config-dir", str(tmp_path),
        "--event", "toggle:1",
        "--json",
    )
    assert code == 0
    data = json.loads(out.out)
    assert data["colspans"]["scores-table-1/round-1"] == 1
    assert data["labels"]["scores-table-1/round-1/label"] == "tap to shrink"
    assert data["visibility"]["scores-table-1/r0/2"] is False
    assert data["visibility"]["scores-table-1/r0/4"] is True


def test_bad_event_exit_code(page_file, capsys):
    code, out = _run(capsys, "render", str(page_file), "--event", "shuffle")
    assert code == 2
    assert "shuffle" in out.err


def test_missing_page_exit_code(tmp_path, capsys):
    code, out = _run(capsys, "render", str(tmp_path / "nope.html"), "--config-dir", str(tmp_path))
    assert code == 1
    assert out.err.startswith("error:")


def test_malformed_markup_exit_code(tmp_path, capsys):
    path = tmp_path / "bad.html"
    path.write_text(SAMPLE_PAGE.replace('colspan="3" data-round="1"', 'colspan="x" data-round="1"'), encoding="utf-8")
    code, out = _run(capsys, "render", str(path), "--config-dir", str(tmp_path))
    assert code == 1
    assert "colspan" in out.err
