import pytest

from canddocs.domain.services.page_pairing import pair_pages
from canddocs.domain.value_objects.candidate_pair import CandidatePair


@pytest.mark.parametrize("count, expected_pairs", [(0, 0), (1, 1), (2, 1), (3, 2), (4, 2), (7, 4)])
def test_pair_count_is_ceiling_of_half(count, expected_pairs):
    pages = [f"p{i}".encode() for i in range(count)]
    pairs = pair_pages(pages)
    assert len(pairs) == expected_pairs
    if pairs:
        assert pairs[-1].has_second_page == (count % 2 == 0)


def test_pairs_are_consecutive_and_ordered():
    pairs = pair_pages([b"a", b"b", b"c", b"d", b"e"])

    assert [p.index for p in pairs] == [1, 2, 3]
    assert (pairs[0].page1, pairs[0].page2) == (b"a", b"b")
    assert (pairs[1].page1, pairs[1].page2) == (b"c", b"d")
    assert pairs[2].page1 == b"e"
    assert pairs[2].page2 is None


def test_candidate_pair_requires_first_page():
    with pytest.raises(ValueError):
        CandidatePair(index=1, page1=b"")
    with pytest.raises(ValueError):
        CandidatePair(index=0, page1=b"x")
