"""
Config loader for PinchPoint.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
import yaml


class ConfigError(Exception):
    """Raised when the config file exists but cannot be used."""


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 1280
    height: int = 720
    fps: int = 30


@dataclass
class MediaPipeConfig:
    model_path: Optional[str] = None
    max_num_hands: int = 1
    min_detection_confidence: float = 0.6
    min_presence_confidence: float = 0.6
    min_tracking_confidence: float = 0.6


@dataclass
class GestureConfig:
    # One Euro filter applied to the cursor target (pixels)
    min_cutoff: float = 0.3
    beta: float = 15.0
    d_cutoff: float = 1.0

    # Cursor mapping gain around the frame center
    sensitivity_x: float = 2.0
    sensitivity_y: float = 2.5

    # Thumb-to-fingertip distances (normalized landmark space)
    swipe_threshold: float = 0.06   # index
    click_threshold: float = 0.06   # middle
    back_threshold: float = 0.06    # ring
    pinky_threshold: float = 0.06   # pinky

    # Hold durations in seconds
    long_press_threshold: float = 0.5
    recent_apps_threshold: float = 0.5

    hand_lost_frames: int = 5


@dataclass
class ActionConfig:
    enabled: bool = True
    move_cursor: bool = True
    swipe_amplify: float = 2.5
    swipe_duration: float = 0.15   # seconds
    back_keys: List[str] = field(default_factory=lambda: ["alt", "left"])
    home_keys: List[str] = field(default_factory=lambda: ["win", "d"])
    recents_keys: List[str] = field(default_factory=lambda: ["alt", "tab"])
    notifications_keys: List[str] = field(default_factory=lambda: ["win", "n"])


@dataclass
class UIConfig:
    show_preview: bool = False
    label_timeout_ms: int = 1000
    cursor_size: int = 48


@dataclass
class ScreenConfig:
    width: int = 0    # 0 = detect from the primary screen
    height: int = 0


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    gestures: GestureConfig = field(default_factory=GestureConfig)
    actions: ActionConfig = field(default_factory=ActionConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    screen: ScreenConfig = field(default_factory=ScreenConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _dict_to_dataclass(cls, data: Optional[dict]):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ConfigError(f"Section for {cls.__name__} must be a mapping, got {type(data).__name__}")
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    if config_path is None:
        # Default to config.yaml in project root
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        # Return defaults if no config file
        return Config()

    with open(config_path, 'r') as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Top level of {config_path} must be a mapping")

    return Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        gestures=_dict_to_dataclass(GestureConfig, data.get('gestures')),
        actions=_dict_to_dataclass(ActionConfig, data.get('actions')),
        ui=_dict_to_dataclass(UIConfig, data.get('ui')),
        screen=_dict_to_dataclass(ScreenConfig, data.get('screen')),
        logging=_dict_to_dataclass(LoggingConfig, data.get('logging')),
    )
