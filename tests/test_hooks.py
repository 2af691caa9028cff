from __future__ import annotations

import logging
import subprocess

from arenatrack.cli.core.hooks import HookManager
from arenatrack.config import Config


def _config(hooks: dict) -> Config:
    return Config.from_dict({"store": {"backend": "local"}, "hooks": hooks})


def test_sound_hook_plays_one_of_the_files(monkeypatch) -> None:
    launched: list[list[str]] = []
    monkeypatch.setattr(subprocess, "Popen", lambda args, **kwargs: launched.append(args))
    files = ["a.mp3", "b.mp3", "c.mp3"]
    manager = HookManager()
    manager.load_from_config(_config({
        "champion_completed": [{"type": "sound", "player": "mpv --really-quiet", "files": files}],
    }))

    for _ in range(5):
        manager.trigger("champion_completed", champion="Zed", profile="Me")

    assert len(launched) == 5
    assert all(args[:2] == ["mpv", "--really-quiet"] for args in launched)
    assert all(args[2] in files for args in launched)


def test_sound_hook_without_files_is_ignored() -> None:
    manager = HookManager()
    manager.load_from_config(_config({"champion_completed": [{"type": "sound", "files": []}]}))
    assert not manager.has_hooks("champion_completed")


def test_sound_player_missing_is_logged(monkeypatch, caplog) -> None:
    def missing(args, **kwargs):
        raise FileNotFoundError(args[0])

    monkeypatch.setattr(subprocess, "Popen", missing)
    manager = HookManager()
    manager.load_from_config(_config({"champion_completed": [{"type": "sound", "files": ["a.mp3"]}]}))

    with caplog.at_level(logging.ERROR):
        manager.trigger("champion_completed", champion="Zed")

    assert "Sound playback failed" in caplog.text


def test_failing_callback_does_not_stop_others(caplog) -> None:
    manager = HookManager()
    called: list[dict] = []

    def broken(**kwargs):
        raise RuntimeError("boom")

    manager.register("profile_created", broken)
    manager.register("profile_created", lambda **kwargs: called.append(kwargs))

    with caplog.at_level(logging.ERROR):
        manager.trigger("profile_created", profile="Me")

    assert called == [{"profile": "Me"}]
    assert "boom" in caplog.text


def test_unknown_event_is_a_noop() -> None:
    HookManager().trigger("nothing_registered", value=1)


def test_webhook_posts_event_payload(monkeypatch) -> None:
    posts: list[tuple] = []
    monkeypatch.setattr(
        "arenatrack.cli.core.hooks.requests.post",
        lambda url, json, timeout: posts.append((url, json)),
    )
    manager = HookManager()
    manager.load_from_config(_config({
        "profile_deleted": [{"type": "webhook", "url": "https://hooks.example.com/x"}],
    }))

    manager.trigger("profile_deleted", profile="Me", id="1")

    assert posts == [("https://hooks.example.com/x", {"profile": "Me", "id": "1"})]


def test_unknown_event_and_hook_type_are_skipped(caplog) -> None:
    manager = HookManager()

    with caplog.at_level(logging.WARNING):
        manager.load_from_config(_config({
            "champion_lost": [{"type": "webhook", "url": "https://hooks.example.com/x"}],
            "profile_created": [{"type": "command", "command": "true"}],
        }))

    assert not manager.has_hooks("champion_lost")
    assert not manager.has_hooks("profile_created")
    assert "unknown event" in caplog.text
