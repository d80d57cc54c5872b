# fruitgift

This is the domain model for a small gift-economy game. Members of a community
keep fruit in their bags. They can give fruit to each other or burn it, and what
they do changes their luck. The library does no I/O of its own. It reaches
storage only through abstract repository classes, and the services built on
those classes are `async`.

## Installation

```
pip install fruitgift
```

To install the test tools as well:

```
pip install "fruitgift[test]"
```

## Modules

- `fruitgift.fruit`
  - Defines the 26 fruits as constants such as `GRAPES`, `MANGO` and `OLIVE`.
  - `FRUITS` holds them all, ordered by `Category` (`STANDARD`, `RARE`,
    `EXOTIC`) and then by rarity.
  - `Fruit.rarity()` returns the within-tier rarity in `[0.0, 1.0]`.
  - `Fruit.value()` is the tier base (1, 3 or 10) multiplied by `1 + rarity()`.
- `fruitgift.bag`
  - `Bag` is a multiset of fruit. It provides `insert` (chainable), `remove`,
    `count`, `total`, `is_empty` and `copy`.
  - Iterating a bag yields `(fruit, count)` pairs.
  - `bag_value(bag)` adds up the values of the fruit in the bag.
- `fruitgift.member`
  - `Member` has a `display_name`, a `MemberId`, a raw luck `luck_raw` in
    `[0, 255]` and a `bag`.
  - `with_id`, `with_bag`, `with_luck` and `with_luck_f64` return copies.
  - `luck()` returns luck normalised to `[0.0, 1.0]`.
  - `receive(fruit)` adds one fruit to the bag.
- `fruitgift.community`
  - `Community` has a `CommunityId`, a raw luck and a dict of members. Its
    `version` (a `SequenceId`) records how far into the log the snapshot has
    been computed.
  - `add_member` and `remove_member` change the set of members.
  - `apply_effects` folds effects into the snapshot and advances `version`.
  - `community_avg_bag_value` gives the mean bag value of the members.
- `fruitgift.event_log`
  - Holds the sequence IDs, the event payloads (`GrantPayload`, `GiftPayload`,
    `BurnPayload`, …), `Event`, `Effect` and `Record`, and the state mutations
    (`AddFruitToMember`, `GiftLuckBonus`, `QuidProQuoPenalty`, …).
  - `Effect.apply(community)` applies the mutations in order. Luck deltas are
    clamped to `[0, 255]`, and mutations for absent members are skipped.
- `fruitgift.gifter.compute_gift` and `fruitgift.burner.compute_burn` turn a
  gift or a burn into mutations. They return an empty list when the action is a
  no-op.
- `fruitgift.luck_adjustments.compute` works out the luck mutations for the
  actions taken since the last grant:
  - gift bonuses
  - the burn bonus
  - ostentatious gift and burn penalties
  - the quid-pro-quo penalty for reciprocal gifts of similar value
- `fruitgift.fruit_weights`
  - `raw_weights(fruits, luck)` computes the luck-dependent drop weights.
  - `DefaultFruitWeights().fruit_weights(fruits, luck)` returns a
    `WeightedIndex`. Its `sample(rng)` takes a `random.Random` and returns an
    index.
- `fruitgift.granter.Granter` is an abstract base class for distributing fruit
  to every member.
- `fruitgift.error`
  - `StorageLayerError` and `GrantInterrupted` are subclasses of `Error`, which
    is itself a `DbError`.
  - Each error carries a `category` (`Category`) and a `status`
    (`Status.PERMANENT` or `Status.TEMPORARY`).
  - `StorageLayerError.wrap(message, err)` keeps the category and status of
    `err`.
- Storage services:
  - `fruitgift.community_store.CommunityStore` provides `init`, `provision`,
    `get` and `get_latest`. `get_latest` applies pending effects page by page
    and saves the advanced snapshot.
  - `fruitgift.event_log_store.EventLogStore` reads records and effects and
    appends events and effects.
  - Both are written against the abstract repositories in
    `fruitgift.community_repo` and `fruitgift.event_log_repo`. They re-raise
    repository failures as `StorageLayerError`.
  - `fruitgift.luck_adjuster.LuckAdjuster` fetches the data that
    `luck_adjustments.compute` needs. Repository errors pass through it
    unchanged.

## Example

```python
from fruitgift.bag import Bag, bag_value
from fruitgift.community import Community
from fruitgift.gifter import compute_gift
from fruitgift.event_log import Effect, SequenceId
from fruitgift.member import Member
from fruitgift.fruit import GRAPES

community = Community()
alice = Member("Alice").with_bag(Bag().insert(GRAPES))
bob = Member("Bob")
community.add_member(alice)
community.add_member(bob)

mutations = compute_gift(community, alice.id, bob.id, GRAPES)
community.apply_effects([Effect(SequenceId(1), community.id, mutations)])

assert community.members[bob.id].bag.count(GRAPES) == 1
assert bag_value(community.members[bob.id].bag) == 1.0
```

## What it does not include

- **No concrete repositories.** The package ships no in-memory or database
  storage. To use `CommunityStore`, `EventLogStore` or `LuckAdjuster`, you
  must subclass `CommunityRepo` and `EventLogRepo` yourself.
- **No `Granter` implementation.** There is no random granter. You can sample
  fruit with `WeightedIndex`, but nothing in the package turns a grant into
  mutations.
- **No commands.** There is no command-line program or interactive session.

## Running the tests

```
pytest
```