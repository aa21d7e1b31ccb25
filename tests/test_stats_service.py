from learnflow.services.stats_service import calculate_stats


def test_stats_by_box(cards):
    stats = calculate_stats(cards)

    assert stats.total == 5
    assert stats.new == 1
    assert stats.learning == 3
    assert stats.mastered == 1
    assert stats.progress == 20.0


def test_stats_for_empty_collection():
    stats = calculate_stats([])

    assert stats.total == 0
    assert stats.progress == 0.0
