"""Unit tests for models."""

from nntm.models import ALL_CATEGORY, CategoryRegistry, Task


class TestTask:
    """Tests for the Task model."""

    def test_defaults(self):
        task = Task()

        assert task.completed is False
        assert task.completion_date is None
        assert task.date == ""
        assert task.priority is None
        assert task.category == ALL_CATEGORY
        assert task.text == ""

    def test_empty_category_becomes_all(self):
        """Category is never empty."""
        assert Task(category="").category == ALL_CATEGORY
        assert Task(category=None).category == ALL_CATEGORY

    def test_priority_tag(self):
        assert Task(priority="A").priority_tag == "(A)"
        assert Task().priority_tag == ""

    def test_matches_all_filter(self):
        """The "all" filter matches every category."""
        assert Task(category="work").matches(ALL_CATEGORY)
        assert Task().matches(ALL_CATEGORY)

    def test_matches_exact_category(self):
        task = Task(category="work")

        assert task.matches("work")
        assert not task.matches("home")

    def test_all_category_only_matches_all_filter(self):
        assert not Task().matches("work")


class TestCategoryRegistry:
    """Tests for CategoryRegistry."""

    def test_all_is_first(self):
        registry = CategoryRegistry()

        assert list(registry) == [ALL_CATEGORY]

    def test_add_preserves_first_appearance_order(self):
        registry = CategoryRegistry()

        registry.add("work")
        registry.add("home")
        registry.add("work")

        assert list(registry) == [ALL_CATEGORY, "work", "home"]

    def test_add_returns_index(self):
        registry = CategoryRegistry()

        assert registry.add("work") == 1
        assert registry.add("home") == 2
        assert registry.add("work") == 1
        assert registry.add(ALL_CATEGORY) == 0

    def test_add_refused_at_capacity(self):
        registry = CategoryRegistry(capacity=2)

        assert registry.add("work") == 1
        assert registry.add("home") is None
        assert "home" not in registry
        assert len(registry) == 2

    def test_clear_keeps_all(self):
        registry = CategoryRegistry()
        registry.add("work")

        registry.clear()

        assert list(registry) == [ALL_CATEGORY]
        assert registry[0] == ALL_CATEGORY
