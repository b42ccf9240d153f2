"""Main entry point for the Sevens host."""

import argparse
import logging
import queue
import random
import sys
from datetime import datetime
from pathlib import Path

from sevens_server.config import Config, load_config
from sevens_server.game.coordinator import SessionAborted, TurnCoordinator
from sevens_server.game.engine import SevensGame
from sevens_server.logging import GameLogConfig, GameLogger
from sevens_server.network.events import InputEvent
from sevens_server.network.server import HostServer
from sevens_server.utils.console_input import ConsoleInput
from sevens_server.utils.logger import GameDisplay, setup_logging

logger = logging.getLogger(__name__)


def generate_log_filename(log_dir: str, config: Config) -> str:
    """Generate log filename with timestamp and player names.

    Format: {ISO timestamp}_{player1}_{player2}_..._{playerN}.jsonl

    Args:
        log_dir: Directory for log files.
        config: Configuration holding the seat names.

    Returns:
        Full path to log file.
    """
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    names = "_".join(p.name.replace(" ", "") for p in config.game.players)
    return str(Path(log_dir) / f"{timestamp}_{names}.jsonl")


def run_session(
    server: HostServer,
    config: Config,
    display: GameDisplay,
    console: ConsoleInput,
    log_dir: str | None,
) -> None:
    """Wait for the client and play matches until it disconnects."""
    inbox: queue.Queue[InputEvent] = queue.Queue()
    console.attach(inbox)

    display.print_waiting_for_client(config.server.port)
    addr = server.accept_client(inbox)
    display.print_client_connected(addr)

    if log_dir is not None:
        log_path = generate_log_filename(log_dir, config)
        game_log_config = GameLogConfig(enabled=True, output_path=log_path)
        print(f"Game log: {log_path}")
    else:
        game_log_config = GameLogConfig(enabled=False)

    rng = random.Random(config.game.seed)
    game = SevensGame(config.rules, rng=rng)

    with GameLogger(game_log_config) as game_logger:
        coordinator = TurnCoordinator(
            game,
            server,
            display,
            inbox,
            player_setup=config.game.players,
            local_seat=config.game.host_seat,
            remote_seat=config.game.client_seat,
            timing=config.timing,
            game_logger=game_logger,
            rng=rng,
        )
        try:
            coordinator.run()
        except SessionAborted:
            display.show_message("Connection lost. Match abandoned.")
        finally:
            server.disconnect_client()
            console.attach(None)


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success)
    """
    parser = argparse.ArgumentParser(description="Sevens (七並べ) host")
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        help="Server port (overrides config)",
    )
    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        help="Random seed for deals (overrides config)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--show-hands",
        action="store_true",
        help="Always show your hand, not only on your turn",
    )
    parser.add_argument(
        "--game-log",
        type=Path,
        help="Directory for game log files (filename auto-generated)",
    )

    args = parser.parse_args()

    config = load_config(args.config)

    if args.port:
        config.server.port = args.port
    if args.seed is not None:
        config.game.seed = args.seed
    if args.verbose:
        config.logging.level = "DEBUG"
    if args.show_hands:
        config.logging.show_hands = True

    # CLI argument overrides config file
    game_log_enabled = args.game_log is not None or config.game_log.enabled
    log_dir = str(args.game_log) if args.game_log else config.game_log.output_dir

    setup_logging(config.logging.level)

    display = GameDisplay(show_hands=config.logging.show_hands)
    console = ConsoleInput()
    console.start()

    print("Sevens host starting...")
    print(f"Port: {config.server.port}")
    print()

    try:
        with HostServer(host=config.server.host, port=config.server.port) as server:
            while True:
                run_session(
                    server,
                    config,
                    display,
                    console,
                    log_dir if game_log_enabled else None,
                )

    except KeyboardInterrupt:
        print("\nServer interrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Server error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
