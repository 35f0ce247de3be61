"""Unit tests for OrderedCollection."""

import pytest

from models.ordered_collection import OrderedCollection


def compare_ints(item: int, key: int) -> int:
    return item - key


@pytest.fixture
def numbers():
    """Collection holding 10, 20, 30, 40."""
    return OrderedCollection([10, 20, 30, 40])


class TestOrderedCollectionAccess:
    """Test get, insert_at and remove_at."""

    def test_empty_collection(self):
        """Test that a new collection is empty."""
        collection = OrderedCollection()

        assert len(collection) == 0
        assert list(collection) == []

    def test_get(self, numbers):
        """Test indexed access."""
        assert numbers.get(0) == 10
        assert numbers.get(3) == 40

    @pytest.mark.parametrize("index", [-1, 4])
    def test_get_out_of_range(self, numbers, index):
        """Test that get rejects indexes outside [0, len)."""
        with pytest.raises(IndexError):
            numbers.get(index)

    def test_insert_at_front_middle_and_end(self, numbers):
        """Test insertion at every valid boundary."""
        numbers.insert_at(0, 5)
        numbers.insert_at(3, 25)
        numbers.insert_at(len(numbers), 50)

        assert list(numbers) == [5, 10, 20, 25, 30, 40, 50]

    @pytest.mark.parametrize("index", [-1, 5])
    def test_insert_at_out_of_range(self, numbers, index):
        """Test that insert_at rejects indexes outside [0, len]."""
        with pytest.raises(IndexError):
            numbers.insert_at(index, 0)

        assert list(numbers) == [10, 20, 30, 40]

    def test_remove_at(self, numbers):
        """Test that remove_at returns the item and closes the gap."""
        assert numbers.remove_at(1) == 20
        assert list(numbers) == [10, 30, 40]

    def test_remove_at_out_of_range(self, numbers):
        """Test that remove_at rejects an index equal to the length."""
        with pytest.raises(IndexError):
            numbers.remove_at(4)


class TestOrderedCollectionBsearch:
    """Test bsearch()."""

    @pytest.mark.parametrize("key,index", [(10, 0), (20, 1), (30, 2), (40, 3)])
    def test_bsearch_hit(self, numbers, key, index):
        """Test that present keys report their index."""
        assert numbers.bsearch(key, compare_ints) == (True, index)

    @pytest.mark.parametrize("key,index", [(5, 0), (15, 1), (35, 3), (45, 4)])
    def test_bsearch_miss_reports_insertion_point(self, numbers, key, index):
        """Test that absent keys report where they would be inserted."""
        assert numbers.bsearch(key, compare_ints) == (False, index)

    def test_bsearch_empty(self):
        """Test that searching an empty collection gives insertion point 0."""
        assert OrderedCollection().bsearch(1, compare_ints) == (False, 0)

    def test_insert_at_search_result_keeps_order(self):
        """Test that inserting at bsearch's answer keeps the items sorted."""
        collection = OrderedCollection()
        for value in [7, 3, 9, 1, 5]:
            found, index = collection.bsearch(value, compare_ints)
            assert not found
            collection.insert_at(index, value)

        assert list(collection) == [1, 3, 5, 7, 9]

    def test_bsearch_with_mixed_key_type(self):
        """Test that the key need not be the same type as the items."""
        collection = OrderedCollection(["apple", "banana", "cherry"])

        found, index = collection.bsearch(
            "b", lambda item, key: (item[0] > key) - (item[0] < key)
        )

        assert (found, index) == (True, 1)
