"""Tests for the game session creators, with in-memory collaborators."""

import asyncio
import random

import pytest

from buddybe.sessions import (
    CREATORS,
    GRID_WIDTH,
    JOIN_CODE_ALPHABET,
    BattleshipCreator,
    CasinoCreator,
    CreationInProgress,
    CreationState,
    CrocodileCreator,
    EmptyWordPool,
    ImpostorCreator,
    InvalidPlayerCount,
    PersistenceError,
    SessionCreator,
    WhoAmICreator,
    derive_grid_height,
    generate_join_code,
)
from buddybe.sessions.creator import SLOT_SYMBOLS


class FakeStore:
    """Records every insert; optionally fails the first ``fail_times`` calls."""

    def __init__(self, error=None, fail_times=0):
        self.calls = []
        self.error = error
        self.fail_times = fail_times

    async def insert_session(self, game_type, fields, seats=None):
        self.calls.append((game_type, dict(fields), seats))
        if self.error is not None and len(self.calls) <= self.fail_times:
            raise self.error

    async def fetch_session(self, game_type, code):
        return None


class FakeWordPool:
    def __init__(self, words=(), error=None):
        self.words = list(words)
        self.error = error
        self.calls = 0

    async def list_words(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.words)


class Notifications(list):
    def __call__(self, message_key):
        self.append(message_key)


def assert_join_code(code):
    assert len(code) == 6
    assert all(c in JOIN_CODE_ALPHABET for c in code)


# --- Grid height ---

@pytest.mark.parametrize("players", range(2, 11))
def test_grid_height_formula(players):
    assert derive_grid_height(players) == 8 + (players - 2) * 3


def test_grid_height_examples():
    assert derive_grid_height(2) == 8
    assert derive_grid_height(3) == 11
    assert derive_grid_height(4) == 14
    assert derive_grid_height(10) == 32
    assert GRID_WIDTH == 8


# --- Validation ---

@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["1", "11", "0", "-3", "abc", "", "4.5", None, True, "1_0", "３", "٣", "0x4", "4e0"])
async def test_battleship_rejects_invalid_player_count(raw):
    store = FakeStore()
    notify = Notifications()
    creator = BattleshipCreator(store, notify=notify)

    with pytest.raises(InvalidPlayerCount) as exc_info:
        await creator.create_session(raw)

    assert store.calls == []
    assert notify == ["games.battleship.players_range"]
    assert exc_info.value.min_players == 2
    assert exc_info.value.max_players == 10
    assert creator.state is CreationState.IDLE


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["2", "21", "many"])
async def test_impostor_rejects_invalid_player_count_before_lookup(raw):
    store = FakeStore()
    pool = FakeWordPool(["w1"])
    creator = ImpostorCreator(store, word_pool=pool)

    with pytest.raises(InvalidPlayerCount):
        await creator.create_session(raw)

    assert pool.calls == 0
    assert store.calls == []


@pytest.mark.asyncio
async def test_player_count_bounds_are_inclusive():
    store = FakeStore()
    creator = BattleshipCreator(store)

    low = await creator.create_session("2")
    high = await creator.create_session(10)

    assert low.fields["grid_size"] == 8
    assert high.fields["grid_size"] == 32
    assert len(store.calls) == 2


@pytest.mark.asyncio
async def test_player_count_whitespace_is_ignored():
    store = FakeStore()
    created = await BattleshipCreator(store).create_session(" 3 ")
    assert created.fields["player_count"] == 3


@pytest.mark.asyncio
async def test_player_count_sign_is_allowed():
    store = FakeStore()
    created = await BattleshipCreator(store).create_session("+4")
    assert created.fields["player_count"] == 4


def test_word_pool_required():
    with pytest.raises(ValueError):
        ImpostorCreator(FakeStore())


def test_base_creator_cannot_be_built():
    with pytest.raises(TypeError):
        SessionCreator(FakeStore())


# --- Join codes ---

def test_generated_codes_use_the_alphabet():
    rng = random.Random(1234)
    for _ in range(500):
        code = generate_join_code(rng)
        assert_join_code(code)
        assert not set(code) & set("IO01")


@pytest.mark.asyncio
async def test_fixed_seed_gives_predictable_code():
    created = await BattleshipCreator(FakeStore(), rng=random.Random(7)).create_session("2")
    assert created.code == generate_join_code(random.Random(7))


# --- End to end ---

@pytest.mark.asyncio
async def test_battleship_end_to_end():
    store = FakeStore()
    created = await BattleshipCreator(store).create_session("4")

    assert len(store.calls) == 1
    game_type, fields, seats = store.calls[0]
    assert game_type == "battleship"
    assert seats is None
    assert fields["player_count"] == 4
    assert fields["grid_size"] == 14
    assert fields["status"] == "waiting"
    assert fields["code"] == created.code
    assert_join_code(created.code)
    assert created.path == f"/games/battleship/{created.code}"


@pytest.mark.asyncio
async def test_impostor_end_to_end():
    store = FakeStore()
    pool = FakeWordPool(["w1", "w2"])
    created = await ImpostorCreator(store, word_pool=pool).create_session("5")

    assert len(store.calls) == 1
    game_type, fields, _ = store.calls[0]
    assert game_type == "impostor"
    assert fields["player_count"] == 5
    assert fields["word_id"] in {"w1", "w2"}
    assert 0 <= fields["impostor_index"] < 5
    assert fields["status"] == "waiting"
    assert created.path == f"/games/impostor/{created.code}"


@pytest.mark.asyncio
@pytest.mark.parametrize("seed", range(40))
async def test_impostor_index_is_a_valid_seat(seed):
    players = 3 + seed % 18
    store = FakeStore()
    creator = ImpostorCreator(store, word_pool=FakeWordPool(["a", "b", "c"]), rng=random.Random(seed))

    created = await creator.create_session(str(players))

    assert 0 <= created.fields["impostor_index"] < players


# --- Word pool failures ---

@pytest.mark.asyncio
async def test_empty_word_pool_fails_without_writing():
    store = FakeStore()
    notify = Notifications()
    creator = ImpostorCreator(store, word_pool=FakeWordPool([]), notify=notify)

    with pytest.raises(EmptyWordPool):
        await creator.create_session("5")

    assert store.calls == []
    assert notify == ["games.error"]


@pytest.mark.asyncio
async def test_word_pool_lookup_error_is_an_empty_pool():
    store = FakeStore()
    creator = CrocodileCreator(store, word_pool=FakeWordPool(error=ConnectionError("down")))

    with pytest.raises(EmptyWordPool) as exc_info:
        await creator.create_session("4")

    assert isinstance(exc_info.value.__cause__, ConnectionError)
    assert store.calls == []


# --- Persistence failures ---

@pytest.mark.asyncio
async def test_persistence_failure_reports_once_and_retry_starts_over():
    store = FakeStore(error=ConnectionError("connection reset"), fail_times=1)
    notify = Notifications()
    creator = ImpostorCreator(
        store,
        word_pool=FakeWordPool(["w1", "w2"]),
        rng=random.Random(99),
        notify=notify,
    )

    with pytest.raises(PersistenceError):
        await creator.create_session("5")

    assert notify == ["games.create_error"]
    assert creator.state is CreationState.IDLE

    created = await creator.create_session("5")

    assert len(store.calls) == 2
    failed_fields = store.calls[0][1]
    assert created.code != failed_fields["code"]
    assert created.fields["player_count"] == 5
    assert notify == ["games.create_error"]


@pytest.mark.asyncio
async def test_store_persistence_error_passes_through():
    error = PersistenceError("duplicate code")
    creator = BattleshipCreator(FakeStore(error=error, fail_times=1))

    with pytest.raises(PersistenceError) as exc_info:
        await creator.create_session("3")

    assert exc_info.value is error


# --- Overlapping attempts ---

class BlockingStore(FakeStore):
    def __init__(self):
        super().__init__()
        self.entered = asyncio.Event()
        self.release = asyncio.Event()

    async def insert_session(self, game_type, fields, seats=None):
        self.calls.append((game_type, dict(fields), seats))
        self.entered.set()
        await self.release.wait()


@pytest.mark.asyncio
async def test_overlapping_attempt_is_rejected():
    store = BlockingStore()
    notify = Notifications()
    creator = BattleshipCreator(store, notify=notify)

    first = asyncio.create_task(creator.create_session("3"))
    await store.entered.wait()
    assert creator.state is CreationState.PERSISTING

    with pytest.raises(CreationInProgress):
        await creator.create_session("3")

    store.release.set()
    created = await first

    assert len(store.calls) == 1
    assert notify == []
    assert creator.state is CreationState.IDLE
    assert created.fields["player_count"] == 3


# --- Other games ---

@pytest.mark.asyncio
async def test_crocodile_seats_and_turns():
    store = FakeStore()
    created = await CrocodileCreator(store, word_pool=FakeWordPool(["w1"])).create_session("4")

    _, fields, seats = store.calls[0]
    assert fields["current_word_id"] == "w1"
    assert fields["current_player"] == 0
    assert fields["showing_player"] == 0
    assert fields["current_guesser"] == 1
    assert fields["round"] == 1
    assert seats == [{"player_index": i} for i in range(4)]
    assert created.seats == seats


@pytest.mark.asyncio
async def test_whoami_characters_cycle_when_pool_is_small():
    store = FakeStore()
    creator = WhoAmICreator(store, word_pool=FakeWordPool(["c1", "c2"]), rng=random.Random(3))

    await creator.create_session("5")

    _, fields, seats = store.calls[0]
    assert 0 <= fields["guesser_index"] < 5
    assert [s["player_index"] for s in seats] == list(range(5))
    characters = [s["character_id"] for s in seats]
    assert set(characters) == {"c1", "c2"}
    # Cycling over a 2-entry pool alternates
    assert characters[0::2] == [characters[0]] * 3
    assert characters[1::2] == [characters[1]] * 2
    assert all(s["guessed"] is False for s in seats)


@pytest.mark.asyncio
async def test_whoami_characters_are_distinct_when_pool_is_large():
    store = FakeStore()
    pool = FakeWordPool([f"c{i}" for i in range(10)])

    await WhoAmICreator(store, word_pool=pool).create_session("6")

    characters = [s["character_id"] for s in store.calls[0][2]]
    assert len(set(characters)) == 6


@pytest.mark.asyncio
async def test_casino_combination_comes_from_seat_symbols():
    store = FakeStore()
    await CasinoCreator(store, rng=random.Random(5)).create_session("5")

    _, fields, seats = store.calls[0]
    seat_symbols = [s["symbol"] for s in seats]
    assert len(seat_symbols) == 5
    assert len(set(seat_symbols)) == 5
    assert set(seat_symbols) <= set(SLOT_SYMBOLS)
    assert len(fields["current_combination"]) == 3
    assert set(fields["current_combination"]) <= set(seat_symbols)
    assert fields["guesser_index"] == 0
    assert fields["current_round"] == 1
    assert fields["guesses_in_round"] == 0


@pytest.mark.asyncio
async def test_casino_symbols_repeat_past_eight_players():
    store = FakeStore()
    await CasinoCreator(store).create_session("12")

    seat_symbols = [s["symbol"] for s in store.calls[0][2]]
    assert seat_symbols[8:] == seat_symbols[:4]


def test_registry_bounds():
    bounds = {name: (c.min_players, c.max_players) for name, c in CREATORS.items()}
    assert bounds == {
        "impostor": (3, 20),
        "battleship": (2, 10),
        "crocodile": (2, 20),
        "whoami": (2, 20),
        "casino": (3, 20),
    }
