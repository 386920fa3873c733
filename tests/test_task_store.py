"""Unit tests for TaskStore."""

import threading

import pytest

from nntm.codec import decode_line, encode_line
from nntm.exceptions import CompletedTaskPriorityError
from nntm.models import ALL_CATEGORY, MAX_TASKS, Task
from nntm.services import TaskStore

TODAY = "2025-06-01"


def make_task(text: str, category: str = ALL_CATEGORY, **kwargs) -> Task:
    """Helper to build a task with a default date."""
    kwargs.setdefault("date", "2025-01-01")
    return Task(text=text, category=category, **kwargs)


@pytest.fixture
def store() -> TaskStore:
    """A store with tasks interleaved across two categories."""
    store = TaskStore()
    store.load(
        [
            make_task("w1", "work", date="2025-03-01", priority="B"),
            make_task("h1", "home", date="2025-01-01"),
            make_task("w2", "work", date="2025-01-01"),
            make_task("h2", "home", date="2025-02-01", priority="A"),
            make_task("w3", "work", date="2025-02-01", priority="A"),
        ]
    )
    return store


def texts(tasks: list[Task]) -> list[str]:
    return [t.text for t in tasks]


class TestTaskStoreQueries:
    """Tests for filtering and visible indexes."""

    def test_load_registers_categories_in_order(self, store: TaskStore):
        assert store.categories == [ALL_CATEGORY, "work", "home"]

    def test_count_visible(self, store: TaskStore):
        assert store.count_visible(ALL_CATEGORY) == 5
        assert store.count_visible("work") == 3
        assert store.count_visible("home") == 2
        assert store.count_visible("missing") == 0

    def test_visible_keeps_storage_order(self, store: TaskStore):
        assert texts(store.visible("work")) == ["w1", "w2", "w3"]
        assert texts(store.visible("home")) == ["h1", "h2"]

    def test_record_at_maps_visible_index(self, store: TaskStore):
        assert store.record_at("home", 1).text == "h2"
        assert store.record_at(ALL_CATEGORY, 1).text == "h1"

    def test_record_at_out_of_range(self, store: TaskStore):
        assert store.record_at("home", 2) is None
        assert store.record_at("home", -1) is None

    def test_load_replaces_and_resets_categories(self, store: TaskStore):
        store.load([make_task("only", "errands")])

        assert len(store) == 1
        assert store.categories == [ALL_CATEGORY, "errands"]


class TestTaskStoreToggle:
    """Tests for toggle_completed."""

    def test_complete_stamps_date_and_folds_priority(self, store: TaskStore):
        task = store.toggle_completed("work", 0, TODAY)

        assert task.completed is True
        assert task.completion_date == TODAY
        assert task.priority is None
        assert task.text == "w1 pri:B"

    def test_toggle_twice_restores_priority(self, store: TaskStore):
        """Completing and reopening gives back the original priority and text."""
        store.toggle_completed("work", 0, TODAY)
        task = store.toggle_completed("work", 0, TODAY)

        assert task.completed is False
        assert task.completion_date is None
        assert task.priority == "B"
        assert task.text == "w1"

    def test_toggle_out_of_range_is_noop(self, store: TaskStore):
        assert store.toggle_completed("home", 5, TODAY) is None
        assert store.completed_tasks() == []

    def test_toggled_task_round_trips(self, store: TaskStore):
        task = store.toggle_completed("work", 0, TODAY)

        assert decode_line(encode_line(task)) == task

    def test_toggle_twice_on_decoded_line_is_reversible(self):
        """Any priority the decoder accepts survives completing and reopening."""
        store = TaskStore()
        store.load(
            [
                decode_line("(É) 2025-01-01 @w call bob"),
                decode_line("(z) 2025-01-01 @w call amy"),
            ]
        )
        before = [(t.priority, t.text) for t in store.snapshot()]

        for index in range(2):
            store.toggle_completed(ALL_CATEGORY, index, TODAY)
            store.toggle_completed(ALL_CATEGORY, index, TODAY)

        assert [(t.priority, t.text) for t in store.snapshot()] == before


class TestTaskStorePriority:
    """Tests for set_priority."""

    def test_set_priority_uppercases(self, store: TaskStore):
        task = store.set_priority("home", 0, "c")

        assert task.priority == "C"
        assert decode_line(encode_line(task)) == task

    def test_clear_priority(self, store: TaskStore):
        task = store.set_priority("work", 0, None)

        assert task.priority is None

    def test_refused_on_completed_task(self, store: TaskStore):
        store.toggle_completed("home", 0, TODAY)

        with pytest.raises(CompletedTaskPriorityError):
            store.set_priority("home", 0, "A")

        assert store.record_at("home", 0).priority is None


class TestTaskStoreCategory:
    """Tests for set_category and add_category."""

    def test_set_category_registers_new_category(self, store: TaskStore):
        task = store.set_category("home", 0, "garden")

        assert task.category == "garden"
        assert store.categories[-1] == "garden"
        assert store.count_visible("home") == 1

    def test_set_category_uses_first_token(self, store: TaskStore):
        task = store.set_category("home", 0, "@garden shed")

        assert task.category == "garden"

    def test_add_category_is_idempotent(self, store: TaskStore):
        assert store.add_category("work") == 1
        assert store.add_category("new") == 3
        assert store.add_category("new") == 3
        assert store.count_visible("new") == 0


class TestTaskStoreInsert:
    """Tests for insert_after and append."""

    def test_insert_after_visible_task(self, store: TaskStore):
        """The new task lands right after the addressed task in storage order."""
        store.insert_after("work", 0, make_task("new", "work"))

        assert texts(store.snapshot()) == ["w1", "new", "h1", "w2", "h2", "w3"]

    def test_insert_after_last_visible_task(self, store: TaskStore):
        store.insert_after("home", 1, make_task("new", "home"))

        assert texts(store.snapshot()) == ["w1", "h1", "w2", "h2", "new", "w3"]

    def test_insert_into_empty_category_appends(self, store: TaskStore):
        store.insert_after("errands", 0, make_task("new", "errands"))

        assert texts(store.snapshot())[-1] == "new"
        assert "errands" in store.categories

    def test_capacity_boundary(self):
        """The 1000th task is accepted, the 1001st refused."""
        store = TaskStore()
        for i in range(MAX_TASKS - 1):
            assert store.append(make_task(f"t{i}"))

        assert store.insert_after(ALL_CATEGORY, 0, make_task("1000th"))
        assert len(store) == MAX_TASKS

        assert not store.insert_after(ALL_CATEGORY, 0, make_task("1001st"))
        assert not store.append(make_task("1001st"))
        assert len(store) == MAX_TASKS

    def test_load_truncates_at_capacity(self):
        store = TaskStore(capacity=3)

        loaded = store.load(make_task(f"t{i}") for i in range(5))

        assert loaded == 3
        assert texts(store.snapshot()) == ["t0", "t1", "t2"]


class TestTaskStoreReorder:
    """Tests for sorting and grouping within a filter."""

    def test_sort_by_date_within_filter(self, store: TaskStore):
        """Only the filtered slots are reordered."""
        store.sort_by_date("work")

        assert texts(store.snapshot()) == ["w2", "h1", "w3", "h2", "w1"]

    def test_sort_by_date_descending(self, store: TaskStore):
        store.sort_by_date("work", descending=True)

        assert texts(store.visible("work")) == ["w1", "w3", "w2"]
        assert texts(store.visible("home")) == ["h1", "h2"]

    def test_sort_by_priority_unset_last(self, store: TaskStore):
        store.sort_by_priority(ALL_CATEGORY)

        assert texts(store.snapshot()) == ["h2", "w3", "w1", "h1", "w2"]

    def test_sort_by_priority_descending(self, store: TaskStore):
        store.sort_by_priority(ALL_CATEGORY, descending=True)

        assert texts(store.snapshot()) == ["h1", "w2", "w1", "h2", "w3"]

    def test_sort_is_stable_for_equal_keys(self):
        store = TaskStore()
        store.load([make_task(f"t{i}", date="2025-01-01") for i in range(6)])

        store.sort_by_date(ALL_CATEGORY, descending=True)

        assert texts(store.snapshot()) == [f"t{i}" for i in range(6)]

    def test_group_by_completion_is_stable(self):
        """Incomplete tasks come first; each group keeps its order."""
        store = TaskStore()
        store.load(
            [
                make_task("a", "work"),
                make_task("b", "work", completed=True, completion_date=TODAY),
                make_task("c", "home", completed=True, completion_date=TODAY),
                make_task("d", "work"),
                make_task("e", "work", completed=True, completion_date=TODAY),
                make_task("f", "work"),
            ]
        )

        store.group_by_completion("work")

        assert texts(store.snapshot()) == ["a", "d", "c", "f", "b", "e"]

    @pytest.mark.parametrize(
        "reorder",
        [
            lambda s: s.sort_by_date("work"),
            lambda s: s.sort_by_priority("work", descending=True),
            lambda s: s.group_by_completion("work"),
        ],
    )
    def test_reorder_keeps_filter_membership(self, store: TaskStore, reorder):
        """Reordering never changes which tasks match, nor tasks outside the filter."""
        store.toggle_completed("work", 1, TODAY)
        before_work = {t.text for t in store.visible("work")}
        before_home = texts(store.visible("home"))
        home_slots = [i for i, t in enumerate(store.snapshot()) if t.category == "home"]

        reorder(store)

        assert {t.text for t in store.visible("work")} == before_work
        assert texts(store.visible("home")) == before_home
        assert [i for i, t in enumerate(store.snapshot()) if t.category == "home"] == home_slots


class TestTaskStoreArchiveSupport:
    """Tests for completed_tasks and remove_completed."""

    def test_remove_completed_compacts_in_order(self, store: TaskStore):
        store.toggle_completed(ALL_CATEGORY, 1, TODAY)
        store.toggle_completed(ALL_CATEGORY, 3, TODAY)

        assert texts(store.completed_tasks()) == ["h1", "h2 pri:A"]
        assert store.remove_completed() == 2
        assert texts(store.snapshot()) == ["w1", "w2", "w3"]

    def test_remove_completed_none(self, store: TaskStore):
        assert store.remove_completed() == 0
        assert len(store) == 5


class TestTaskStoreConcurrency:
    """Tests for concurrent appends."""

    def test_concurrent_appends_are_not_lost(self):
        store = TaskStore()
        per_thread = 100

        def writer(name: str) -> None:
            for i in range(per_thread):
                store.append(make_task(f"{name}-{i}", name))

        def reader(stop: threading.Event) -> None:
            while not stop.is_set():
                store.count_visible(ALL_CATEGORY)
                store.visible("t0")

        stop = threading.Event()
        read_thread = threading.Thread(target=reader, args=(stop,))
        read_thread.start()
        writers = [threading.Thread(target=writer, args=(f"t{n}",)) for n in range(4)]
        for t in writers:
            t.start()
        for t in writers:
            t.join()
        stop.set()
        read_thread.join()

        assert len(store) == 4 * per_thread
        assert len({t.text for t in store.snapshot()}) == 4 * per_thread
