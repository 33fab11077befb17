"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings

from pathedit.engine.config import EditorConfig


class Settings(BaseSettings):
    pathedit_env: str = "development"
    pathedit_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Client canvas the paths are drawn over
    canvas_width: float = 800.0
    canvas_height: float = 600.0

    # Editor behaviour
    vertex_radius: float = 4.0
    rect_seed_size: float = 10.0
    nudge_step: float = 5.0
    nudge_scale: float = 1.1
    nudge_angle: float = 5.0

    # Change notifications kept for GET /api/events
    event_history: int = 1000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def editor_config(self) -> EditorConfig:
        return EditorConfig(
            vertex_radius=self.vertex_radius,
            rect_seed_size=self.rect_seed_size,
            nudge_step=self.nudge_step,
            nudge_scale=self.nudge_scale,
            nudge_angle=self.nudge_angle,
        )


settings = Settings()
