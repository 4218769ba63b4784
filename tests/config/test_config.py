"""Tests for settings, logging setup and the domain table.

Tests cover:
- Settings defaults and environment overrides
- loguru JSON sink with bound component
- structlog JSON rendering, level filtering, bound and run context
- Domain configuration lookup and general fallback
"""

import json
import sys

import pytest
import structlog
from loguru import logger

from consensus_engine.config import logging as log_config
from consensus_engine.config.domain_configs import (
    DOMAIN_CONFIGS,
    get_domain_caveats,
    get_domain_config,
    get_typical_credentials,
)
from consensus_engine.config.settings import Settings
from consensus_engine.data_management.schemas import Domain
from consensus_engine.utils.logging import (
    bind_run_context,
    clear_run_context,
    configure_structured_logging,
    get_correlation_id,
    get_structured_logger,
)


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest.fixture
def restore_loguru():
    yield
    logger.remove()
    logger.configure(extra={})
    logger.add(sys.stderr)


@pytest.fixture
def restore_structlog():
    yield
    structlog.reset_defaults()


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("MAX_CLAIMS", "MAX_CONCURRENCY", "DAILY_COST_CAP"):
            monkeypatch.delenv(name, raising=False)
        fresh = Settings(_env_file=None)

        assert fresh.max_claims == 5
        assert fresh.max_concurrency == 3
        assert fresh.max_search_results == 10
        assert fresh.parallel_evaluation is True
        assert fresh.daily_cost_cap == 50.0

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("MAX_CLAIMS", "8")
        monkeypatch.setenv("PARALLEL_EVALUATION", "false")
        fresh = Settings(_env_file=None)

        assert fresh.max_claims == 8
        assert fresh.parallel_evaluation is False


class TestLoguruLogging:
    def test_json_output_carries_component(self, capsys, restore_loguru):
        log_config.configure_logging(log_format="json", log_level="INFO")

        log_config.get_logger("adjudicators.test").info("Tier assigned")
        log_config.get_logger("adjudicators.test").debug("hidden")

        lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert len(lines) == 1
        record = lines[0]["record"]
        assert record["message"] == "Tier assigned"
        assert record["extra"]["component"] == "adjudicators.test"

    def test_unbound_records_get_default_component(self, capsys, restore_loguru):
        log_config.configure_logging(log_format="json", log_level="DEBUG")

        logger.debug("plain")

        record = json.loads(capsys.readouterr().out.splitlines()[0])["record"]
        assert record["extra"]["component"] == "consensus_engine"


class TestStructuredLogging:
    def test_json_event_with_context(self, capsys, restore_structlog):
        configure_structured_logging(log_format="json", log_level="INFO")

        log = get_structured_logger("pipeline", run_id="run-1", component="AdjudicationPipeline")
        log.info("claim_evaluated", claim_id="c1")
        log.debug("not_shown")

        lines = [json.loads(line) for line in capsys.readouterr().err.splitlines()]
        assert len(lines) == 1
        event = lines[0]
        assert event["event"] == "claim_evaluated"
        assert event["run_id"] == "run-1"
        assert event["component"] == "AdjudicationPipeline"
        assert event["claim_id"] == "c1"
        assert event["level"] == "info"
        assert "timestamp" in event

    def test_run_context_bound_and_cleared(self, capsys, restore_structlog):
        configure_structured_logging(log_format="json", log_level="INFO")
        log = get_structured_logger("budget")

        bind_run_context("run-9")
        log.info("cost_recorded")
        clear_run_context()
        log.info("cost_reset")

        first, second = [json.loads(line) for line in capsys.readouterr().err.splitlines()]
        assert first["run_id"] == "run-9"
        assert "run_id" not in second

    def test_correlation_ids_unique(self):
        assert get_correlation_id() != get_correlation_id()


class TestDomainConfigs:
    def test_every_domain_has_entry(self):
        assert set(DOMAIN_CONFIGS) == {d.value for d in Domain}

    def test_unknown_domain_falls_back_to_general(self):
        assert get_domain_config("astrology") is DOMAIN_CONFIGS["general"]

    def test_accepts_enum(self):
        assert get_typical_credentials(Domain.MEDICINE) == ["MD", "PhD", "MPH", "DO"]

    def test_caveats_are_copies(self):
        caveats = get_domain_caveats("psychology")
        assert caveats
        caveats.append("mutated")
        assert "mutated" not in DOMAIN_CONFIGS["psychology"]["consensus_caveats"]
