import pytest

from fruitgift.community import CommunityId
from fruitgift.error import Category, Status, StorageLayerError
from fruitgift.event_log import Effect, Event, GrantPayload, SequenceId
from fruitgift.event_log_repo import EventLogRepo
from fruitgift.event_log_store import EventLogStore


class FakeRepo(EventLogRepo):
    """Records calls, or fails every call when ``fail`` is set."""

    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    def _reply(self, name, *args, result=None):
        if self.fail:
            raise StorageLayerError("failed", Category.UNAVAILABLE, Status.TEMPORARY)
        self.calls.append((name, *args))
        return result

    async def get_record(self, community_id, id):
        return self._reply("get_record", id)

    async def get_effect_for_event(self, community_id, event_id):
        return self._reply("get_effect_for_event", event_id)

    async def get_effects_after(self, community_id, limit, after):
        return self._reply("get_effects_after", limit, after, result=[])

    async def get_records_before(self, community_id, limit, before):
        return self._reply("get_records_before", limit, before, result=[])

    async def get_latest_grant_events(self, community_id, limit):
        return self._reply("get_latest_grant_events", limit, result=[])

    async def get_latest_gift_records(self, community_id, limit):
        return self._reply("get_latest_gift_records", limit, result=[])

    async def get_records_between(self, community_id, after, before):
        return self._reply("get_records_between", after, before, result=[])

    async def append_event(self, community_id, payload):
        event = Event(id=SequenceId(1), community_id=community_id, payload=payload)
        return self._reply("append_event", payload, result=event)

    async def append_effect(self, event_id, community_id, mutations):
        effect = Effect(id=event_id, community_id=community_id, mutations=mutations)
        return self._reply("append_effect", event_id, result=effect)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "call, message",
    [
        (lambda s: s.get_record(CommunityId(), SequenceId.zero()), "failed to read event log record"),
        (lambda s: s.get_effect_for_event(CommunityId(), SequenceId.zero()), "failed to read effect"),
        (lambda s: s.get_effects_after(CommunityId(), 10), "failed to read effects"),
        (lambda s: s.get_records_before(CommunityId(), 5), "failed to read records"),
        (lambda s: s.append_event(CommunityId(), GrantPayload(count=1)), "failed to create event"),
        (lambda s: s.append_effect(SequenceId.zero(), CommunityId(), []), "failed to create effect"),
    ],
)
async def test_errors_are_wrapped(call, message):
    with pytest.raises(StorageLayerError) as info:
        await call(EventLogStore(FakeRepo(fail=True)))
    assert str(info.value) == f"Storage layer error: {message}"
    assert info.value.category is Category.UNAVAILABLE
    assert info.value.status is Status.TEMPORARY
    assert str(info.value.__cause__) == "Storage layer error: failed"


@pytest.mark.asyncio
async def test_cursors_default_to_zero_and_none():
    repo = FakeRepo()
    log = EventLogStore(repo)
    assert await log.get_effects_after(CommunityId(), 10) == []
    await log.get_records_before(CommunityId(), 3)
    await log.get_records_before(CommunityId(), 3, SequenceId(7))
    assert repo.calls == [
        ("get_effects_after", 10, SequenceId.zero()),
        ("get_records_before", 3, None),
        ("get_records_before", 3, SequenceId(7)),
    ]


@pytest.mark.asyncio
async def test_append_event_and_effect_pass_through():
    log = EventLogStore(FakeRepo())
    community_id = CommunityId()
    event = await log.append_event(community_id, GrantPayload(count=2))
    effect = await log.append_effect(event.id, community_id, [])
    assert event == Event(id=SequenceId(1), community_id=community_id, payload=GrantPayload(2))
    assert effect == Effect(id=SequenceId(1), community_id=community_id, mutations=())