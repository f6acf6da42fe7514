from unittest.mock import MagicMock

import pytest

from repohint.core.errors import RuleDefinitionError
from repohint.rules.markers import SuppressionMarkerStore
from repohint.rules.models import RuleDescriptor, RuleOutcome, rule
from repohint.rules.processor import RuleProcessor


@pytest.fixture
def pr():
    context = MagicMock()
    context.number = "42"
    return context


@pytest.fixture
def marker_store(tmp_path):
    return SuppressionMarkerStore(tmp_path)


@rule("once", comment_once=True)
async def failing_once(pr):
    return RuleOutcome(comments="Fix the title\n", passed=False)


@pytest.mark.asyncio
async def test_comment_once_suppresses_second_comment_but_keeps_verdict(pr, marker_store):
    first = await RuleProcessor(pr, failing_once, marker_store).run()
    second = await RuleProcessor(pr, failing_once, marker_store).run()

    assert first == RuleOutcome(comments="Fix the title\n", passed=False)
    assert second.comments == ""
    assert second.passed is False


@pytest.mark.asyncio
async def test_override_neither_reads_nor_writes_markers(pr, marker_store):
    outcome = await RuleProcessor(pr, failing_once, marker_store).run(disable_comment_once=True)

    assert outcome.comments == "Fix the title\n"
    assert marker_store.recorded("once") == set()

    await RuleProcessor(pr, failing_once, marker_store).run()
    repeated = await RuleProcessor(pr, failing_once, marker_store).run(disable_comment_once=True)
    assert repeated.comments == "Fix the title\n"


@pytest.mark.asyncio
async def test_empty_comment_records_nothing(pr, marker_store):
    @rule("quiet", comment_once=True)
    def quiet(pr):
        return RuleOutcome()

    await RuleProcessor(pr, quiet, marker_store).run()

    assert marker_store.recorded("quiet") == set()


@pytest.mark.asyncio
async def test_rules_without_comment_once_always_comment(pr, marker_store):
    @rule("chatty")
    async def chatty(pr):
        return RuleOutcome(comments="Hello\n")

    for _ in range(2):
        assert (await RuleProcessor(pr, chatty, marker_store).run()).comments == "Hello\n"
    assert not marker_store.marker_file("chatty").exists()


@pytest.mark.asyncio
async def test_sync_handlers_and_mapping_results(pr, marker_store):
    descriptor = RuleDescriptor(name="legacy", handler=lambda pr: {"comments": "x", "passed": False})

    outcome = await RuleProcessor(pr, descriptor, marker_store).run()

    assert outcome == RuleOutcome(comments="x", passed=False)


@pytest.mark.asyncio
async def test_handler_errors_propagate(pr, marker_store):
    @rule("broken")
    async def broken(pr):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        await RuleProcessor(pr, broken, marker_store).run()


def test_comment_once_requires_a_name():
    with pytest.raises(RuleDefinitionError):
        RuleDescriptor(name=None, handler=lambda pr: None, comment_once=True)


def test_handler_must_be_callable():
    with pytest.raises(RuleDefinitionError):
        RuleDescriptor(name="x", handler="not callable")
