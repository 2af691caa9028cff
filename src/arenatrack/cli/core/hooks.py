"""Event hooks: celebration sounds and webhook notifications."""

import logging
import random
import shlex
import subprocess
from typing import Callable, Dict, List

import requests

logger = logging.getLogger(__name__)

# Events fired by the CLI
EVENTS = ("champion_completed", "profile_created", "profile_deleted")


class HookManager:
    """Runs the callbacks configured for tracker events."""

    def __init__(self):
        self._hooks: Dict[str, List[Callable]] = {}

    def has_hooks(self, event: str) -> bool:
        return bool(self._hooks.get(event))

    def register(self, event: str, callback: Callable):
        """Add a callback for an event."""
        self._hooks.setdefault(event, []).append(callback)
        logger.debug(f"Registered hook for event: {event}")

    def trigger(self, event: str, **payload):
        """
        Call every callback for an event with the event payload.

        A failing callback is logged and does not stop the others.
        """
        for callback in self._hooks.get(event, []):
            try:
                callback(**payload)
            except Exception as e:
                logger.error(f"Hook callback failed for {event}: {e}")

    def clear(self):
        self._hooks = {}

    def load_from_config(self, config):
        """
        Register the hooks listed under ``hooks`` in the config.

        hooks:
          champion_completed:
            - type: sound
              player: "paplay"
              files: [sounds/win1.ogg, sounds/win2.ogg]
          profile_deleted:
            - type: webhook
              url: "https://..."

        Args:
            config: Config object
        """
        for event, entries in (config.get("hooks", {}) or {}).items():
            if event not in EVENTS:
                logger.warning(f"Ignoring hooks for unknown event: {event}")
                continue
            if not isinstance(entries, list):
                continue

            for entry in entries:
                hook_type = entry.get("type")
                if hook_type == "sound" and entry.get("files"):
                    self.register(event, self._sound_hook(entry.get("player", "paplay"), entry["files"]))
                elif hook_type == "webhook" and entry.get("url"):
                    self.register(event, self._webhook_hook(entry["url"]))
                else:
                    logger.warning(f"Skipping invalid {event} hook: {entry!r}")

    def _webhook_hook(self, url: str) -> Callable:
        def hook(**payload):
            try:
                requests.post(url, json=payload, timeout=5)
                logger.debug(f"Sent webhook to: {url}")
            except requests.RequestException as e:
                logger.error(f"Failed to send webhook: {e}")
        return hook

    def _sound_hook(self, player: str, files: List[str]) -> Callable:
        """Play one of ``files`` at random without waiting for it to finish."""
        def hook(**payload):
            sound = random.choice(files)
            try:
                subprocess.Popen(
                    [*shlex.split(player), sound],
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                )
                logger.debug(f"Playing sound: {sound}")
            except OSError as e:
                logger.error(f"Sound playback failed: {e}")
        return hook


_hook_manager = HookManager()


def get_hook_manager() -> HookManager:
    return _hook_manager


def trigger_hook(event: str, **payload):
    """Trigger an event on the shared hook manager."""
    _hook_manager.trigger(event, **payload)
