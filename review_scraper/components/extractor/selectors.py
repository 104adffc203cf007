"""CSS selectors for the restaurant review listing markup."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ReviewPageSelectors:
    """Selectors for one restaurant page and its paginated review listing.

    Fragment-level selectors (`review_title` ... `review_rating`) are resolved
    inside a single `review_container` element.
    """

    consent_accept: str = "#onetrust-accept-btn-handler"
    address: str = "span.yEWoV:nth-child(1)"
    all_languages_filter: str = '[for="filters_detail_language_filterLang_ALL"]'
    loading_indicator: str = ".ppr_priv_hotels_loading_box"

    review_container: str = ".review-container"
    show_more: str = ".review-container .partial_entry > span"
    next_page: str = ".prw_common_responsive_pagination > div:nth-child(1) > a:nth-child(2)"

    review_title: str = ".quote"
    review_date: str = ".ratingDate"
    review_text: str = ".partial_entry"
    review_hidden_text: str = ".postSnippet"
    review_rating: str = ".ui_bubble_rating"

    @property
    def show_more_script(self) -> str:
        # Clicking the first toggle expands every truncated review on the page.
        return f'document.querySelector("{self.show_more}").click()'


REVIEW_PAGE_SELECTORS = ReviewPageSelectors()

__all__ = [
    "ReviewPageSelectors",
    "REVIEW_PAGE_SELECTORS",
]
