from readiness.bluebook import lint_citation, looks_like_case


def _kinds(cite: str) -> set[str]:
    return {issue.id.split(":", 1)[0] for issue in lint_citation(cite)}


def test_bare_v_in_case_name_is_flagged() -> None:
    issues = lint_citation("Smith v Jones")
    assert len(issues) == 1
    assert "use “v.” in case names" in issues[0].title
    assert issues[0].severity == "warning"
    assert issues[0].meta == {"cite": "Smith v Jones"}


def test_well_formed_citation_is_clean() -> None:
    assert lint_citation("Roe v. Wade, 410 U.S. 113, 120 (1973)") == []


def test_missing_parenthetical_and_pincite() -> None:
    assert _kinds("Roe v. Wade, 410 U.S. 113") == {"bluebook_parenthetical", "bluebook_pincite"}
    assert _kinds("123 F.3d 456 (5th Cir. 2020)") == {"bluebook_pincite"}
    assert _kinds("123 F.3d 456, 460") == {"bluebook_parenthetical"}


def test_statutes_and_blank_are_not_case_checked() -> None:
    assert not looks_like_case("Cal. Civ. Proc. Code § 2031.310")
    assert lint_citation("Cal. Civ. Proc. Code § 2031.310") == []
    assert lint_citation("   ") == []


def test_issue_ids_are_stable_per_citation() -> None:
    first = [issue.id for issue in lint_citation("Smith v Jones, 12 F.3d 45")]
    second = [issue.id for issue in lint_citation("Smith v Jones, 12 F.3d 45")]
    assert first == second
    assert len(set(first)) == 3
