"""Tests for payment term and target age resolution."""

from vnquote.core.types import MainProductSelection
from vnquote.quote.catalog import ProductCatalog, TermMode
from vnquote.quote.target_age import resolve_term, waiver_term


class TestResolveTerm:
    """Tests for resolve_term."""

    def test_fixed_term_package(self, catalog: ProductCatalog, main_person):
        """Test that a package's target age follows its fixed term."""
        resolution = resolve_term(catalog.get("TRON_TAM_AN"), MainProductSelection(key="TRON_TAM_AN"), main_person)
        assert resolution.mode == TermMode.FIXED_TERM
        assert resolution.payment_term == 10
        assert resolution.target_age == 39
        assert resolution.end_age == 40
        assert resolution.target_age_editable is False

    def test_selected_term(self, catalog: ProductCatalog, main_person):
        """Test that the selected term drives the target age."""
        selection = MainProductSelection(key="AN_BINH_UU_VIET", payment_term=15)
        resolution = resolve_term(catalog.get("AN_BINH_UU_VIET"), selection, main_person)
        assert resolution.mode == TermMode.SELECTED_TERM
        assert resolution.target_age == 44
        assert (resolution.min_term, resolution.max_term) == (5, 15)

    def test_selected_term_missing(self, catalog: ProductCatalog, main_person):
        """Test that no selected term leaves the target age unresolved."""
        selection = MainProductSelection(key="AN_BINH_UU_VIET")
        resolution = resolve_term(catalog.get("AN_BINH_UU_VIET"), selection, main_person)
        assert resolution.target_age is None
        assert resolution.end_age is None

    def test_user_input_bounds(self, catalog: ProductCatalog, main_person):
        """Test the editable range for investment-linked products."""
        selection = MainProductSelection(key="PUL_TRON_DOI", payment_term=20)
        resolution = resolve_term(catalog.get("PUL_TRON_DOI"), selection, main_person, requested_target_age=70)
        assert resolution.target_age == 70
        assert resolution.target_age_editable is True
        assert resolution.min_term == 4
        assert resolution.max_term == 70
        assert resolution.min_target_age == 49
        assert resolution.max_target_age == 99
        assert "49" in resolution.hint

    def test_user_input_without_term(self, catalog: ProductCatalog, main_person):
        """Test the hint asks for a term when none is entered."""
        selection = MainProductSelection(key="PUL_TRON_DOI")
        resolution = resolve_term(catalog.get("PUL_TRON_DOI"), selection, main_person)
        assert resolution.target_age is None
        assert resolution.min_target_age == main_person.age
        assert "payment term" in resolution.hint


class TestWaiverTerm:
    """Tests for waiver_term."""

    def test_limited_by_holder_age(self):
        """Test that the waiver stops after the holder turns 60."""
        assert waiver_term(holder_age=50, main_age=30, target_age=80) == 11

    def test_limited_by_illustration(self):
        """Test that the waiver stops with the illustration."""
        assert waiver_term(holder_age=30, main_age=30, target_age=39) == 10

    def test_never_negative(self):
        """Test holders already past the limit."""
        assert waiver_term(holder_age=65, main_age=30, target_age=80) == 0
