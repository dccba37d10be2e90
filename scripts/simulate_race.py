"""Headless race runner — simulates a full race and prints the result.

Usage:
    uv run python scripts/simulate_race.py
    uv run python scripts/simulate_race.py --track my_track.json --laps 2 --cars 6
    uv run python scripts/simulate_race.py --difficulty hard --seed 7 --hud-every 300
    uv run python scripts/simulate_race.py --db tracks.db --track-id 3
"""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from topdown_racer.overlay.renderer import HudData, HudRenderer  # noqa: E402
from topdown_racer.race.engine import RaceEngine  # noqa: E402
from topdown_racer.race.inputs import AutopilotInput  # noqa: E402
from topdown_racer.race.models import Difficulty, RaceConfig  # noqa: E402
from topdown_racer.race.progress import ordinal  # noqa: E402
from topdown_racer.track.layout import Track  # noqa: E402
from topdown_racer.track.storage import TrackStorage, load_track_file  # noqa: E402


class _HudPrinter:
    """Prints the HUD line every *every* ticks."""

    def __init__(self, every: int) -> None:
        self._every = every
        self._hud = HudRenderer()

    def draw(self, state) -> None:
        if self._every <= 0 or state.tick % self._every:
            return
        hud = self._hud.render(HudData.from_state(state))
        warning = f"  {hud['warning']}" if hud["warning"] else ""
        print(
            f"[{state.tick:>6}] lap {hud['lap']:>5}  pos {hud['position']:>4}  "
            f"cp {hud['checkpoint']:>5}  {hud['speed']:>9}  boost {hud['boost_pct']:>3}%{warning}"
        )


def _load_track(args: argparse.Namespace) -> Track:
    if args.track:
        return load_track_file(args.track)
    if args.track_id is not None:
        storage = TrackStorage(args.db)
        try:
            track = storage.get_track(args.track_id)
        finally:
            storage.close()
        if track is None:
            print(f"Track {args.track_id} not found in {args.db}", file=sys.stderr)
            sys.exit(1)
        return track
    return Track.default()


def main() -> None:
    ap = argparse.ArgumentParser(description="Top-down racer — headless race simulation")
    ap.add_argument("--track", default="", help="Editor JSON track file")
    ap.add_argument("--db", default="tracks.db", help="SQLite track database")
    ap.add_argument("--track-id", type=int, default=None, help="Saved track id in --db")
    ap.add_argument("--laps", type=int, default=3, help="Laps to race")
    ap.add_argument("--cars", type=int, default=4, help="Total cars including the player")
    ap.add_argument(
        "--difficulty", choices=[d.value for d in Difficulty], default="easy", help="AI difficulty"
    )
    ap.add_argument("--seed", type=int, default=None, help="Random seed")
    ap.add_argument("--max-ticks", type=int, default=60 * 60 * 10, help="Tick limit")
    ap.add_argument("--hud-every", type=int, default=600, help="Print HUD every N ticks (0 = never)")
    ap.add_argument("--log-level", default="WARNING", help="Logging level")
    args = ap.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        track = _load_track(args)
        config = RaceConfig(
            laps=args.laps,
            total_cars=args.cars,
            difficulty=Difficulty(args.difficulty),
            seed=args.seed,
        )
    except (OSError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    engine = RaceEngine(track, config)
    state = engine.run(AutopilotInput(), args.max_ticks, renderer=_HudPrinter(args.hud_every))

    print("-" * 60)
    print(f"Phase : {state.phase.value}   Ticks: {state.tick}")
    if state.message:
        print(state.message)
    for i, car in enumerate(state.ranking, start=1):
        status = "finished" if car.finished else f"lap {car.lap}, checkpoint {car.checkpoint_index}"
        print(f"  {ordinal(i):>4}  {car.name:<8} {status}")


if __name__ == "__main__":
    main()
