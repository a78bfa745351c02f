"""
This module is used to run a game of Blackjack from the command line.

It can be used to play in different modes:
- Interactive console mode (the default), where the user places bets and
  picks actions at the console.
- Simulation mode (`--simulate N`), where basic strategy plays N rounds.
- Logging mode (`--log_file FILE`), where game output is written to a file;
  prompts still go to the console.
- Visualization mode (`--vis`), where a real-time graph of the chip balance
  is displayed during a simulation.
"""

import argparse
import logging
import time

import matplotlib.pyplot as plt

from holecard.blackjack.errors import ConfigurationError
from holecard.blackjack.config import TableConfig
from holecard.blackjack.game import BlackjackGame
from holecard.blackjack.strategy import BasicStrategy, ConsoleStrategy
from holecard.common.io_interface import (
    ConsoleIOInterface,
    DummyIOInterface,
    LoggingIOInterface,
)


class BlackjackGraph:
    def __init__(self, max_games, starting_chips):
        self.max_games = max_games
        self.games = [0]
        self.chips = [starting_chips]

        plt.ion()  # Turn on interactive mode
        self.fig, self.ax = plt.subplots()
        (self.line,) = self.ax.plot(self.games, self.chips, "b-")

        self.ax.set_xlim(0, max(max_games, 1))
        self.ax.set_ylim(starting_chips - 100, starting_chips + 100)
        self.ax.set_title("Blackjack Performance")
        self.ax.set_xlabel("Rounds")
        self.ax.set_ylabel("Chips")
        self.ax.grid(True)

    def update(self, game_number, chips):
        self.games.append(game_number)
        self.chips.append(chips)

        self.line.set_data(self.games, self.chips)

        if game_number > self.ax.get_xlim()[1]:
            self.ax.set_xlim(0, game_number + 10)

        y_min = min(self.chips) - 10
        y_max = max(self.chips) + 10
        self.ax.set_ylim(y_min, y_max)

        self.fig.canvas.draw()
        self.fig.canvas.flush_events()


def build_parser():
    parser = argparse.ArgumentParser(description="Run a Blackjack game.")
    parser.add_argument(
        "-d", "--decks", type=int, default=1, help="Number of decks in the shoe"
    )
    parser.add_argument(
        "-p",
        "--penetration",
        type=float,
        default=0.0,
        help="Fraction of the shoe dealt before reshuffling, between 0 and 1",
    )
    parser.add_argument(
        "--soft_17_hit",
        action="store_true",
        help="The dealer hits on soft 17.",
        default=False,
    )
    parser.add_argument(
        "--six_to_five",
        action="store_true",
        help="Blackjack pays 6:5 instead of 3:2.",
        default=False,
    )
    parser.add_argument(
        "-e",
        "--early_surrender",
        action="store_true",
        help="Offer surrender before the dealer checks for blackjack.",
        default=False,
    )
    parser.add_argument(
        "-l",
        "--late_surrender",
        action="store_true",
        help="Allow surrender as a first action on a hand.",
        default=False,
    )
    parser.add_argument(
        "--split_aces",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Allow splitting aces.",
    )
    parser.add_argument(
        "--double_after_split",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Allow doubling down on a split hand.",
    )
    parser.add_argument(
        "--max_splits", type=int, default=None, help="Maximum splits per round"
    )
    parser.add_argument(
        "-i",
        "--insurance",
        action="store_true",
        help="Offer insurance when the dealer shows an ace.",
        default=False,
    )
    parser.add_argument(
        "-c", "--chips", type=int, default=1000, help="Starting number of chips"
    )
    parser.add_argument("--min_bet", type=int, default=None, help="Minimum bet amount")
    parser.add_argument("--max_bet", type=int, default=None, help="Maximum bet amount")
    parser.add_argument(
        "-s",
        "--simulate",
        type=int,
        default=None,
        metavar="ROUNDS",
        help="Play ROUNDS rounds with basic strategy instead of asking for input.",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for shuffling the shoe"
    )
    parser.add_argument(
        "--log_file",
        type=str,
        help="Log game output to the specified file. If not provided, output goes to the console.",
    )
    parser.add_argument(
        "--log_level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Level of the application log.",
    )
    parser.add_argument(
        "--vis",
        action="store_true",
        help="Visualize the simulation results in real-time graph.",
        default=False,
    )
    return parser


def config_from_args(args) -> TableConfig:
    return TableConfig(
        decks=args.decks,
        penetration=args.penetration,
        soft_17_hit=args.soft_17_hit,
        six_to_five=args.six_to_five,
        early_surrender=args.early_surrender,
        late_surrender=args.late_surrender,
        split_aces=args.split_aces,
        double_after_split=args.double_after_split,
        max_splits=args.max_splits,
        insurance=args.insurance,
        chips=args.chips,
        max_bet=args.max_bet,
        min_bet=args.min_bet,
        simulate=args.simulate,
        seed=args.seed,
    )


def create_io_interface(args):
    """Create the IO interface based on the command line arguments."""
    if args.log_file:
        return LoggingIOInterface(args.log_file)
    if args.simulate is not None:
        return DummyIOInterface()
    return ConsoleIOInterface()


def print_config(config: TableConfig) -> None:
    print("Table configuration:")
    for key, value in config.to_dict().items():
        print(f"  {key}: {value}")


def print_report(report: dict) -> None:
    print("Simulation completed." if report.get("simulated") else "Game finished.")
    print(f"Rounds played: {report['rounds_played']:,}")
    print(f"Hands played: {report['hands_played']:,}")
    print(f"Player wins: {report['player_wins']:,}")
    print(f"Dealer wins: {report['dealer_wins']:,}")
    print(f"Draws: {report['draws']:,}")
    print(f"Player blackjacks: {report['player_blackjacks']:,}")
    print(f"Net Earnings: {report['net']:,}")
    print(f"Total Bets: {report['total_bet']:,}")
    print(f"House Edge: {report['house_edge']:.2f}%")


def run(config: TableConfig, io_interface, vis=False):
    """Play a configured game to the end and return its statistics report."""
    table = config.build_table()
    if config.is_simulation:
        bet = config.min_bet if config.min_bet is not None else config.chips // 100
        strategy = BasicStrategy(config.simulate, max(bet, 1))
    else:
        strategy = ConsoleStrategy(ConsoleIOInterface())

    graph = BlackjackGraph(config.simulate or 0, config.chips) if vis else None
    game = BlackjackGame(table, strategy, io_interface, graph)

    start_time = time.time()
    game.play()
    duration = time.time() - start_time

    report = table.statistics.report()
    report["simulated"] = config.is_simulation
    report["chips"] = table.chips
    report["duration"] = duration
    return report


def main():
    """
    Main function to start the game.

    It reads the table configuration from the command line, validates it, plays
    the game in the selected mode and prints the statistics of the rounds played.
    """
    args = build_parser().parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level))

    config = config_from_args(args)
    try:
        config.validate()
    except ConfigurationError as exc:
        print(exc)
        return 1
    print_config(config)

    io_interface = create_io_interface(args)
    report = run(config, io_interface, vis=args.vis)

    print_report(report)
    print(f"Final chips: {report['chips']:,}")
    if config.is_simulation:
        rounds_per_second = (
            report["rounds_played"] / report["duration"] if report["duration"] > 0 else 0
        )
        print(f"\nDuration of simulation: {report['duration']:.2f} seconds")
        print(f"Rounds simulated per second: {rounds_per_second:,.2f}")

    if args.vis:
        plt.ioff()
        plt.show()  # Keep the graph window open after simulation ends
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
