import pytest

from fruitgift.community import Community, CommunityId
from fruitgift.community_repo import CommunityRepo
from fruitgift.community_store import EFFECTS_PAGE_SIZE, CommunityStore
from fruitgift.error import Category, GrantInterrupted, Status, StorageLayerError
from fruitgift.event_log import Effect, SequenceId
from fruitgift.event_log_repo import EventLogProvider


def _err():
    return GrantInterrupted("test error")


def _empty_effects(community_id, start, stop):
    return [
        Effect(id=SequenceId(i), community_id=community_id, mutations=())
        for i in range(start, stop + 1)
    ]


class ErrorRepo(CommunityRepo):
    async def get(self, id, version):
        raise _err()

    async def get_latest(self, id):
        raise _err()

    async def put(self, community):
        raise _err()


class GetOkPutErrorRepo(CommunityRepo):
    def __init__(self, community):
        self.community = community

    async def get(self, id, version):
        return None

    async def get_latest(self, id):
        return self.community.copy()

    async def put(self, community):
        raise _err()


class GetOkPutOkRepo(CommunityRepo):
    def __init__(self, community=None):
        self.community = community
        self.puts = []

    async def get(self, id, version):
        return None

    async def get_latest(self, id):
        return None if self.community is None else self.community.copy()

    async def put(self, community):
        self.puts.append(community)
        return community


class EmptyEventLog(EventLogProvider):
    async def get_record(self, community_id, id):
        return None

    async def get_effect_for_event(self, community_id, event_id):
        return None

    async def get_effects_after(self, community_id, limit, after):
        return []

    async def get_records_before(self, community_id, limit, before):
        return []

    async def get_latest_grant_events(self, community_id, limit):
        return []

    async def get_latest_gift_records(self, community_id, limit):
        return []

    async def get_records_between(self, community_id, after, before):
        return []


class ErrorEventLog(EmptyEventLog):
    async def get_effects_after(self, community_id, limit, after):
        raise _err()


class PagedEventLog(EmptyEventLog):
    """Returns the given pages in turn; an exception in the list is raised instead."""

    def __init__(self, pages):
        self.pages = list(pages)
        self.calls = []

    async def get_effects_after(self, community_id, limit, after):
        self.calls.append((limit, after))
        if not self.pages:
            return []
        page = self.pages.pop(0)
        if isinstance(page, Exception):
            raise page
        return page


@pytest.mark.asyncio
async def test_init_propagates_put_error():
    store = CommunityStore(ErrorRepo(), ErrorEventLog())
    with pytest.raises(StorageLayerError) as info:
        await store.init()
    assert str(info.value) == "Storage layer error: failed to initialize community"
    assert isinstance(info.value.__cause__, GrantInterrupted)


@pytest.mark.asyncio
async def test_provision_propagates_put_error():
    store = CommunityStore(ErrorRepo(), ErrorEventLog())
    with pytest.raises(StorageLayerError) as info:
        await store.provision(CommunityId())
    assert str(info.value) == "Storage layer error: failed to provision community"


@pytest.mark.asyncio
async def test_init_persists_fresh_community():
    repo = GetOkPutOkRepo()
    store = CommunityStore(repo, EmptyEventLog())
    community = await store.init()
    assert community.version == SequenceId.zero()
    assert community.members == {}
    assert repo.puts == [community]


@pytest.mark.asyncio
async def test_provision_uses_given_id():
    repo = GetOkPutOkRepo()
    store = CommunityStore(repo, EmptyEventLog())
    id = CommunityId()
    community = await store.provision(id)
    assert community.id == id
    assert repo.puts[0].id == id


@pytest.mark.asyncio
async def test_get_propagates_repo_error():
    store = CommunityStore(ErrorRepo(), ErrorEventLog())
    with pytest.raises(StorageLayerError) as info:
        await store.get(CommunityId(), SequenceId.zero())
    assert str(info.value) == "Storage layer error: failed to retrieve community snapshot"
    assert info.value.category is Category.INTERRUPTED
    assert info.value.status is Status.TEMPORARY


@pytest.mark.asyncio
async def test_get_latest_propagates_repo_error():
    store = CommunityStore(ErrorRepo(), ErrorEventLog())
    with pytest.raises(StorageLayerError) as info:
        await store.get_latest(CommunityId())
    assert str(info.value) == (
        "Storage layer error: failed to retrieve latest version of community"
    )


@pytest.mark.asyncio
async def test_get_latest_propagates_event_log_error():
    community = Community()
    store = CommunityStore(GetOkPutErrorRepo(community), ErrorEventLog())
    with pytest.raises(StorageLayerError) as info:
        await store.get_latest(community.id)
    assert str(info.value) == (
        "Storage layer error: failed to retrieve effects for community at batch number 1"
    )


@pytest.mark.asyncio
async def test_get_latest_propagates_put_error_after_applying_effects():
    community = Community()
    event_log = PagedEventLog([_empty_effects(community.id, 1, 1)])
    store = CommunityStore(GetOkPutErrorRepo(community), event_log)
    with pytest.raises(StorageLayerError) as info:
        await store.get_latest(community.id)
    assert str(info.value) == "Storage layer error: failed to persist updated community"


@pytest.mark.asyncio
async def test_get_with_get_ok_put_error_repo_returns_none():
    community = Community()
    store = CommunityStore(GetOkPutErrorRepo(community), ErrorEventLog())
    assert await store.get(community.id, SequenceId.zero()) is None


@pytest.mark.asyncio
async def test_get_latest_returns_none_when_community_not_found():
    store = CommunityStore(GetOkPutOkRepo(), EmptyEventLog())
    assert await store.get_latest(CommunityId()) is None


@pytest.mark.asyncio
async def test_get_latest_returns_community_when_no_pending_effects():
    community = Community()
    store = CommunityStore(GetOkPutErrorRepo(community), EmptyEventLog())
    assert await store.get_latest(community.id) == community


@pytest.mark.asyncio
async def test_get_latest_paginates_through_effects_spanning_two_full_pages():
    community = Community()
    event_log = PagedEventLog(
        [
            _empty_effects(community.id, 1, EFFECTS_PAGE_SIZE),
            _empty_effects(community.id, EFFECTS_PAGE_SIZE + 1, EFFECTS_PAGE_SIZE + 1),
        ]
    )
    store = CommunityStore(GetOkPutOkRepo(community), event_log)
    result = await store.get_latest(community.id)
    assert result.version == SequenceId(EFFECTS_PAGE_SIZE + 1)


@pytest.mark.asyncio
async def test_get_latest_paginates_through_all_effects():
    community = Community()
    event_log = PagedEventLog([_empty_effects(community.id, 1, EFFECTS_PAGE_SIZE)])
    store = CommunityStore(GetOkPutOkRepo(community), event_log)
    result = await store.get_latest(community.id)
    assert result.version == SequenceId(EFFECTS_PAGE_SIZE)
    assert event_log.calls == [
        (EFFECTS_PAGE_SIZE, SequenceId.zero()),
        (EFFECTS_PAGE_SIZE, SequenceId(EFFECTS_PAGE_SIZE)),
    ]


@pytest.mark.asyncio
async def test_get_latest_partial_page_breaks_without_fetching_second_batch():
    community = Community()
    event_log = PagedEventLog([_empty_effects(community.id, 1, 1), _err()])
    store = CommunityStore(GetOkPutOkRepo(community), event_log)
    result = await store.get_latest(community.id)
    assert result.version == SequenceId(1)
    assert len(event_log.calls) == 1


@pytest.mark.asyncio
async def test_get_latest_error_on_second_batch_includes_batch_number_in_message():
    community = Community()
    event_log = PagedEventLog([_empty_effects(community.id, 1, EFFECTS_PAGE_SIZE), _err()])
    store = CommunityStore(GetOkPutOkRepo(community), event_log)
    with pytest.raises(StorageLayerError) as info:
        await store.get_latest(community.id)
    assert str(info.value) == (
        "Storage layer error: failed to retrieve effects for community at batch number 2"
    )


@pytest.mark.asyncio
async def test_get_latest_saves_advanced_snapshot():
    community = Community()
    repo = GetOkPutOkRepo(community)
    event_log = PagedEventLog([_empty_effects(community.id, 1, 3)])
    store = CommunityStore(repo, event_log)
    result = await store.get_latest(community.id)
    assert [c.version for c in repo.puts] == [SequenceId(3)]
    assert result.version == SequenceId(3)