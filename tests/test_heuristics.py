import pytest

from hostelhub.models.enums import IssueCategory, IssuePriority
from hostelhub.services import heuristics


class TestCategorize:

    def test_plumbing_with_emergency_words(self):
        category, priority, confidence = heuristics.categorize(
            'Bathroom flood', 'water leak from the pipe, urgent',
        )
        assert category == IssueCategory.PLUMBING
        assert priority == IssuePriority.EMERGENCY
        # any detected non-MEDIUM priority saturates the score
        assert confidence == 100

    def test_nothing_recognised_is_low_other(self):
        assert heuristics.categorize('Hello', 'just saying hi') == (IssueCategory.OTHER, IssuePriority.LOW, 100)

    def test_category_hit_without_priority_word_stays_medium(self):
        category, priority, confidence = heuristics.categorize('Wifi', 'router keeps dropping')
        assert category == IssueCategory.INTERNET
        assert priority == IssuePriority.MEDIUM
        assert confidence == 20

    def test_priority_word_alone_keeps_level(self):
        _, priority, _ = heuristics.categorize('Serious', 'something happened')
        assert priority == IssuePriority.HIGH

    def test_tie_goes_to_earlier_category(self):
        # one plumbing hit (tap) and one electrical hit (switch)
        category, _, _ = heuristics.categorize('tap', 'switch')
        assert category == IssueCategory.PLUMBING

    def test_emergency_checked_before_high(self):
        _, priority, _ = heuristics.categorize('Terrible fire', 'in the kitchen')
        assert priority == IssuePriority.EMERGENCY

    def test_confidence_capped_at_hundred(self):
        text = ' '.join(heuristics.CATEGORY_KEYWORDS[IssueCategory.CLEANLINESS])
        _, _, confidence = heuristics.categorize(text, 'emergency')
        assert confidence == 100

    def test_categorizer_protocol(self):
        assert heuristics.default_categorizer.suggest('fan', 'not spinning') == heuristics.categorize('fan', 'not spinning')


class TestSuggestCategories:

    def test_every_matching_category_in_table_order(self):
        assert heuristics.suggest_categories('wifi is down and the fan stopped') == [
            IssueCategory.ELECTRICAL, IssueCategory.INTERNET,
        ]

    @pytest.mark.parametrize('text', ['', 'hel', None])
    def test_partial_or_empty_input_defaults_to_other(self, text):
        assert heuristics.suggest_categories(text) == [IssueCategory.OTHER]


class TestSentiment:

    @pytest.mark.parametrize('text,expected', [
        ('Tap fixed, good work', 'positive'),
        ('Light broken, terrible', 'negative'),
        ('Light bulb replaced', 'neutral'),
        ('Broken but fixed', 'neutral'),
    ])
    def test_classify(self, text, expected):
        assert heuristics.classify_sentiment(text) == expected

    def test_keywords_count_once_each(self):
        # "broken" repeated is still one negative hit against two positives
        assert heuristics.classify_sentiment('broken broken broken, resolved and great') == 'positive'

    def test_overall_mood_needs_strict_majority(self):
        assert heuristics.overall_mood(['positive', 'positive', 'negative']) == 'positive'
        assert heuristics.overall_mood(['positive', 'negative']) == 'neutral'
        assert heuristics.overall_mood([]) == 'neutral'
