from proptrack.domain.dictionary import FINANCIAL_DICTIONARY, lookup, search


def test_terms_are_unique():
    terms = [e.term.lower() for e in FINANCIAL_DICTIONARY]
    assert len(terms) == len(set(terms))


def test_lookup_is_case_insensitive():
    entry = lookup("  cap rate ")
    assert entry is not None
    assert entry.term == "Cap Rate"
    assert lookup("not a term") is None


def test_search_matches_term_formula_and_description():
    assert [e.term for e in search("mirr")] == ["MIRR"]
    assert any(e.term == "Net Yield" for e in search("rent - expenses"))


def test_empty_search_returns_everything():
    assert len(search("")) == len(FINANCIAL_DICTIONARY)
