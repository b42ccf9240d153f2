"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator

from sevens_server.models.player import PlayerKind, PlayerSetup


def _default_players() -> list[PlayerSetup]:
    return [
        PlayerSetup(name="Player 1", kind=PlayerKind.HUMAN),
        PlayerSetup(name="CPU 1", kind=PlayerKind.COMPUTER),
        PlayerSetup(name="Player 2", kind=PlayerKind.HUMAN),
        PlayerSetup(name="CPU 2", kind=PlayerKind.COMPUTER),
    ]


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = "0.0.0.0"
    port: int = 42486


class GameConfig(BaseModel):
    """Game configuration."""

    players: list[PlayerSetup] = Field(
        default_factory=_default_players, min_length=4, max_length=4
    )
    host_seat: int = Field(default=0, ge=0, le=3)  # Seat played at the host's console
    client_seat: int = Field(default=2, ge=0, le=3)  # Seat played by the remote client
    seed: int | None = None

    @model_validator(mode="after")
    def check_seats(self) -> "GameConfig":
        """Each human seat needs an input: the host console or the client."""
        if self.host_seat == self.client_seat:
            raise ValueError("host_seat and client_seat must differ")
        for seat, entry in enumerate(self.players):
            if entry.kind == PlayerKind.HUMAN and seat not in (self.host_seat, self.client_seat):
                raise ValueError(f"seat {seat} is human but neither host_seat nor client_seat")
        return self


class RulesConfig(BaseModel):
    """Rules configuration."""

    max_passes: int = 3


class TimingConfig(BaseModel):
    """Presentation delays in seconds."""

    start_delay: float = 1.5
    auto_pass_delay: float = 0.8
    cpu_think_min: float = 0.8
    cpu_think_jitter: float = 0.7
    after_pass: float = 1.0
    after_eliminate: float = 1.5
    after_play: float = 0.6
    after_human_play: float = 0.4


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    show_hands: bool = False


class GameLogSettings(BaseModel):
    """JSONL game log configuration."""

    enabled: bool = False
    output_dir: str = "logs"


class Config(BaseModel):
    """Root configuration."""

    server: ServerConfig = ServerConfig()
    game: GameConfig = GameConfig()
    rules: RulesConfig = RulesConfig()
    timing: TimingConfig = TimingConfig()
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogSettings = GameLogSettings()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
