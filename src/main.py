"""CLI entry point for the scoreboard grid.

Reads a server-rendered scores page, replays interaction events against the
table engine and prints the resulting render instructions (JSON) or the
visible grid (text).

Event syntax (``--event`` may be repeated; events apply in the given order):

  sort:TABLE_ID:COLUMN   header click on sort column COLUMN
  player:NAME            select participant
  reset-player           clear participant selection
  round:ID               select round
  reset-round            clear round selection
  toggle:ID              collapse / expand round group

Example:
  scoregrid render page.html --event sort:scores-table-1:3 --event toggle:2 --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from parsing.errors import ParsingError
from parsing.scores_table_parser import parse_scores_page
from scoregrid.app.bootstrap import create_app
from scoregrid.app.config_store import EngineConfig, load_config
from scoregrid.errors import UnknownEventError
from scoregrid.services.visibility_filter import row_element_id
from scoregrid.viewmodels.scoreboard_viewmodel import (
    HeaderClick,
    InteractionEvent,
    ParticipantClick,
    ParticipantReset,
    RenderInstructions,
    RoundReset,
    RoundSelect,
    RoundToggle,
    ScoreboardViewModel,
)


def parse_event(spec: str) -> InteractionEvent:
    kind, _, rest = spec.partition(":")
    if kind == "sort":
        table_id, _, column = rest.rpartition(":")
        if table_id and column.lstrip("-").isdigit():
            return HeaderClick(table_id=table_id, column=int(column))
    elif kind == "player" and rest:
        return ParticipantClick(participant_id=rest)
    elif kind == "reset-player" and not rest:
        return ParticipantReset()
    elif kind == "round" and rest:
        return RoundSelect(round_id=rest)
    elif kind == "reset-round" and not rest:
        return RoundReset()
    elif kind == "toggle" and rest:
        return RoundToggle(round_id=rest)
    raise UnknownEventError(f"Cannot parse event '{spec}'", context={"event": spec})


def format_grid(vm: ScoreboardViewModel, instructions: RenderInstructions) -> str:
    lines: List[str] = []
    vis = instructions.visibility
    for table_id, table in vm.state.tables.items():
        lines.append(f"[{table_id}]")
        for row in table.rows:
            if not vis.get(row_element_id(table_id, row.row_id), True):
                continue
            texts = [
                cell.text
                for i, cell in enumerate(row.cells)
                if vis.get(row.cell_id(table_id, i), True)
            ]
            lines.append(" | ".join(texts))
    return "\n".join(lines)


def _load_config(args: argparse.Namespace) -> EngineConfig:
    cfg = load_config(args.config_dir)
    if args.year is not None:
        cfg.event_year = args.year
    if args.strategy:
        cfg.sort_strategy = args.strategy
    return cfg


def cmd_render(args: argparse.Namespace) -> int:
    try:
        events = [parse_event(e) for e in args.event or []]
    except UnknownEventError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    cfg = _load_config(args)
    try:
        page = parse_scores_page(Path(args.page).read_text(encoding="utf-8"), year=cfg.event_year)
    except (OSError, ParsingError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    ctx = create_app(headless=True, config=cfg, capture_logs=False)
    vm = ctx.viewmodel
    instructions = vm.load(page.tables, page.elements)
    for event in events:
        result = vm.dispatch(event)
        if not result.is_empty():
            instructions = result
    if args.json:
        print(json.dumps(instructions.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(format_grid(vm, instructions))
    return 0


def cmd_gui(args: argparse.Namespace) -> int:  # pragma: no cover - interactive
    from scoregrid.views.scores_table_view import ScoresTableView

    cfg = _load_config(args)
    page = parse_scores_page(Path(args.page).read_text(encoding="utf-8"), year=cfg.event_year)
    ctx = create_app(headless=False, config=cfg)
    view = ScoresTableView(ctx.viewmodel)
    view.set_table(page.tables[0], page.elements)
    view.show()
    return ctx.qt_app.exec()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="scoregrid")
    p.add_argument("--verbose", action="store_true", help="Log engine activity to stderr")
    sub = p.add_subparsers(dest="command", required=True)

    def common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("page", help="Rendered scores page (HTML)")
        sp.add_argument("--year", type=int, help="Year for tee-time cells (default: config/current)")
        sp.add_argument("--strategy", choices=["restart", "stable"], help="Sort strategy")
        sp.add_argument("--config-dir", help="Directory holding scoregrid.json")

    render = sub.add_parser("render", help="Replay events and print the result")
    common(render)
    render.add_argument("--event", action="append", help="Interaction event (repeatable)")
    render.add_argument("--json", action="store_true", help="Print render instructions as JSON")
    render.set_defaults(func=cmd_render)

    gui = sub.add_parser("gui", help="Open the first scores table in a window")
    common(gui)
    gui.set_defaults(func=cmd_gui)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
