import argparse
import os
import sys
from collections import Counter
from typing import List, Optional, Sequence

from dotenv import load_dotenv
from loguru import logger

from ludo_state import Color, Dice, SimulationResult, Simulator, TurnMachine, config
from ludo_state.render import TextBoard
from ludo_state.selectors import SELECTORS, create

load_dotenv()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play headless Ludo games with the rules engine")
    parser.add_argument(
        "--games",
        type=int,
        default=int(os.getenv("NGAMES", 1)),
        help="Number of games to play",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.DICE_SEED,
        help="Optional seed for dice and random selection",
    )
    parser.add_argument(
        "--selector",
        type=str,
        choices=sorted(SELECTORS),
        default=os.getenv("SELECTOR", "random"),
        help="How pieces are picked when several can move",
    )
    parser.add_argument(
        "--max-rolls",
        type=int,
        default=config.MAX_TURNS,
        help="Stop a game after this many rolls",
    )
    parser.add_argument(
        "--show-board",
        action="store_true",
        help="Print the text board after every roll",
    )
    parser.add_argument(
        "--force",
        type=str,
        default=os.getenv("FORCE_DICE", ""),
        help="Comma-separated dice values rolled first in every game, e.g. 6,6,3",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=os.getenv("LOG_LEVEL", "INFO"),
        help="loguru level for the console sink",
    )
    args = parser.parse_args(argv)
    # env defaults bypass argparse choices
    if args.selector not in SELECTORS:
        parser.error(f"unknown selector '{args.selector}', expected one of {sorted(SELECTORS)}")
    try:
        args.force = [int(v) for v in args.force.split(",") if v.strip()]
    except ValueError:
        parser.error(f"--force expects comma-separated integers, got '{args.force}'")
    if any(not 1 <= v <= 6 for v in args.force):
        parser.error("--force values must be between 1 and 6")
    return args


def play(
    seed: Optional[int],
    selector_name: str,
    max_rolls: int,
    show_board: bool,
    forced: Sequence[int] = (),
) -> SimulationResult:
    dice = Dice(seed=seed)
    dice.force_all(forced)
    if dice.pending:
        logger.debug(f"{dice.pending} forced rolls queued")
    machine = TurnMachine(dice=dice)
    selector = create(selector_name, seed=seed)
    sim = Simulator(
        machine=machine,
        selectors={color: selector for color in Color},
        max_rolls=max_rolls,
    )

    board = TextBoard(machine.game)
    machine.subscribe(board)
    machine.announce()

    def show(_: SimulationResult) -> None:
        print(board.render())
        print()

    return sim.run(on_roll=show if show_board else None)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logger.remove()
    logger.add(sys.stderr, level=args.log_level.upper())

    wins: Counter = Counter()
    unfinished = 0
    for game_index in range(args.games):
        seed = None if args.seed is None else args.seed + game_index
        result = play(seed, args.selector, args.max_rolls, args.show_board, args.force)
        if result.winner is None:
            unfinished += 1
            continue
        wins[result.winner.label] += 1
        logger.info(
            f"game {game_index + 1}: {result.winner.label} in {result.rolls} rolls,"
            f" {result.captures} captures, {result.forfeits} forfeits"
        )

    print("Wins:")
    for name, count in wins.most_common():
        print(f"  {name:8s} {count:4d}")
    if unfinished:
        print(f"  unfinished {unfinished:4d}")


if __name__ == "__main__":
    main()
