"""Tests for shared observability logging."""

import logging
import time

import pytest

from hitbloq_star_ratings.observability.logging import get_logger, pool_logger


def test_get_logger_formats_utc_timestamps(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    fixed = time.struct_time((2020, 1, 2, 3, 4, 5, 3, 2, 0))

    def fake_gmtime(_: float | None = None) -> time.struct_time:
        return fixed

    monkeypatch.setattr(time, "gmtime", fake_gmtime)

    name = "hitbloq_star_ratings.test.logging"
    logger = get_logger(name)
    logger.info("Hello")

    captured = capsys.readouterr()
    assert "2020-01-02T03:04:05+0000 INFO hitbloq_star_ratings.test.logging: Hello" in captured.err


def test_get_logger_is_singleton_per_name() -> None:
    name = "hitbloq_star_ratings.test.logging.singleton"
    logger = get_logger(name)
    logger_again = get_logger(name)

    assert logger is logger_again
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO


def test_pool_logger_tags_lines_with_pool(capsys: pytest.CaptureFixture[str]) -> None:
    logger = pool_logger("hitbloq_star_ratings.test.logging.pool", "poodles")
    logger.info("%s/%s %s", 1, 3, "Song")

    captured = capsys.readouterr()
    assert "hitbloq_star_ratings.test.logging.pool [poodles]: 1/3 Song" in captured.err


def test_plain_logger_has_no_pool_tag(capsys: pytest.CaptureFixture[str]) -> None:
    get_logger("hitbloq_star_ratings.test.logging.plain").warning("careful")

    captured = capsys.readouterr()
    assert "WARNING hitbloq_star_ratings.test.logging.plain: careful" in captured.err
