import pytest

from cards.title_normalizer import (
    apply_targeted_fixes,
    clean_summary_title,
    clean_title_for_search,
    cleanup_initials,
    detect_card_type,
    detect_sport,
    extract_brand_and_set,
    extract_card_number,
    extract_grade,
    extract_parallel,
    extract_player_name,
    extract_print_run,
    extract_set_terms,
    extract_year,
    is_autograph,
    is_rookie,
    select_name_words,
    strip_terms,
)


@pytest.mark.parametrize("title, expected", [
    ("2024 Panini Prizm Malik Nabers Silver Prizm RC PSA 10", "Malik Nabers"),
    ("2023 Topps Chrome Elly De La Cruz #21 Refractor", "Elly De La Cruz"),
    ("1986 Fleer Michael Jordan #57 PSA 8", "Michael Jordan"),
    ("Cj.s.troud 2023 Panini Prizm Rookie", "CJ Stroud"),
    ("2022 Bowman Chrome Jackson Chourio 1st Bowman Auto BCP-50", "Jackson Chourio"),
    ("2021 Panini Prizm Jalen Green Rookie RC #322", "Jalen Green"),
    ("Shaq Silver Prizm 1992", "Shaquille O'Neal"),
    ("1952 Topps No. 311 Mickey Mantle", "Mickey Mantle"),
    ("1989 Upper Deck No. 1 Ken Griffey Jr PSA 10", "Ken Griffey Jr"),
])
def test_extract_player_name(title, expected):
    assert extract_player_name(title) == expected


@pytest.mark.parametrize("title", ["", None, "PSA 10 #12 /99"])
def test_extract_player_name_empty(title):
    assert extract_player_name(title) == ""


def test_steps_for_pinned_name():
    steps = []
    extract_player_name("2024 Panini Prizm Malik Nabers RC", steps=steps)
    assert [s["step"] for s in steps] == [
        "start", "afterGradingStrip", "afterInitialsCleanup", "pinnedNameHit",
    ]
    assert steps[-1]["result"] == "Malik Nabers"


def test_steps_for_unknown_name():
    steps = []
    name = extract_player_name("2022 Bowman Chrome Jackson Chourio PSA 9", steps=steps)
    assert name == "Jackson Chourio"
    assert [s["step"] for s in steps] == [
        "start", "afterGradingStrip", "afterInitialsCleanup", "afterNumberStrip",
        "afterTermStrip", "candidate", "afterTargetedFixes", "final",
    ]
    by_step = {s["step"]: s["clean_title"] for s in steps}
    assert "PSA" not in by_step["afterGradingStrip"]
    assert by_step["candidate"] == "jackson chourio"


def test_known_players_hit_step():
    steps = []
    extract_player_name("2023 Topps Chrome Elly De La Cruz", steps=steps)
    hit = [s for s in steps if s["step"] == "knownPlayersHit"]
    assert hit and hit[0]["result"] == "Elly De La Cruz"


def test_custom_table_is_used():
    table = {"jackson chourio": "Jackson Chourio (MIL)"}
    assert extract_player_name("2022 Bowman Jackson Chourio", table=table) == "Jackson Chourio (MIL)"


def test_verbose_extraction_logs(monkeypatch, capsys):
    monkeypatch.setenv("VERBOSE_EXTRACTION", "true")
    extract_player_name("1986 Fleer Michael Jordan")
    out = capsys.readouterr().out
    assert "afterNumberStrip" in out
    assert "knownPlayersHit" in out


def test_cleanup_initials():
    assert cleanup_initials("Cj.s.troud") == "CJ Stroud"
    assert cleanup_initials("C.J.stroud") == "CJ Stroud"
    assert cleanup_initials("T.J. Watt") == "TJ Watt"
    assert cleanup_initials("") == ""


def test_strip_terms_keeps_color_surname():
    assert strip_terms("jalen green rookie") == ["jalen", "green"]
    # a color after a full name is a parallel
    assert strip_terms("jalen green silver") == ["jalen", "green"]
    assert strip_terms("wayne gretzky hockey") == ["wayne", "gretzky"]


def test_select_name_words():
    assert select_name_words(["elly", "de", "la", "cruz", "extra"]) == ["elly", "de", "la", "cruz"]
    assert select_name_words(["ken", "griffey", "jr", "upper"]) == ["ken", "griffey", "jr"]
    assert select_name_words(["mike", "trout", "angels"]) == ["mike", "trout"]
    assert select_name_words([]) == []


def test_apply_targeted_fixes():
    assert apply_targeted_fixes("Jalen Hurts Philadelphia") == "Jalen Hurts"
    assert apply_targeted_fixes("NBA Ja Morant") == "Ja Morant"
    assert apply_targeted_fixes("Ja Morant") == "Ja Morant"
    assert apply_targeted_fixes("") == ""


def test_clean_summary_title():
    title = "2024 Panini Prizm Malik Nabers Silver Prizm RC PSA 10 GEM MT Giants"
    assert clean_summary_title(title) == "2024 Panini Prizm Malik Nabers Silver Prizm"


def test_clean_summary_title_keeps_year_range_and_symbols():
    assert clean_summary_title("1994-95 Upper Deck Shaq - Magic") == "1994-95 Upper Deck Shaq"
    assert clean_summary_title("🔥 Luka Doncic #77 /99 🔥") == "Luka Doncic #77 /99"
    assert clean_summary_title("") == ""


def test_clean_title_for_search():
    title = "2024 Prizm Jayden Daniels RC Auto #12 /25 PSA 10"
    assert clean_title_for_search(title) == "2024 prizm jayden daniels #12 /25"


@pytest.mark.parametrize("title, expected", [
    ("2023 Bowman Chrome #BDC-72 Auto", "BDC-72"),
    ("Prizm Silver #8", "8"),
    ("Topps No. 250 Mantle", "250"),
    ("Prizm Gold #/10", None),
    ("2020 Topps Mike Trout PSA 10", None),
    ("Prizm #RC", None),
])
def test_extract_card_number(title, expected):
    assert extract_card_number(title) == expected


def test_number_fields():
    assert extract_year("1994-95 Upper Deck") == 1994
    assert extract_year("Topps 2051 Promo") is None
    assert extract_print_run("Gold /10") == "/10"
    assert extract_print_run("Blue 12/99") == "/99"
    assert extract_print_run("Base") is None
    assert extract_grade("BGS 9.5 Gem Mint") == "BGS 9.5"
    assert extract_grade("psa10 Trout") == "PSA 10"
    assert extract_grade("Raw card") is None


def test_detect_sport():
    assert detect_sport("2023 Topps Chrome Shohei Ohtani") == "Baseball"
    assert detect_sport("Charizard Holo Base Set") == "Pokemon"
    assert detect_sport("Orlando Magic Shaq Rookie") == "Basketball"
    assert detect_sport("Mystery card") == "Unknown"


def test_brand_set_and_terms():
    assert extract_brand_and_set("2023 Topps Chrome Elly") == ("Topps", "Chrome")
    assert extract_brand_and_set("2024 Panini Prizm Nabers") == ("Panini", "Prizm")
    assert extract_brand_and_set("Mystery card") == ("Unknown", "Unknown")
    assert extract_set_terms("2023 Topps Chrome Update Elly") == ["topps chrome", "update"]
    assert extract_set_terms("") == []


def test_card_type_and_flags():
    assert detect_card_type("Prizm Silver RC") == "Rookie"
    assert detect_card_type("Jersey Patch") == "Relic"
    assert detect_card_type("Chrome Refractor") == "Refractor"
    assert detect_card_type("") == "Base"
    assert extract_parallel("Prizm Silver Prizm") == "Silver Prizm"
    assert extract_parallel("Chrome Gold Refractor /50") == "Gold Refractor"
    assert extract_parallel("Topps base") is None
    assert is_rookie("2022 1st Bowman Chrome")
    assert is_autograph("Signed by the player")
    assert not is_autograph("Autumn set")
