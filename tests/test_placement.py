"""Tests for placement validation, word extraction and scoring."""

import pytest

from dabble.game.placement import (
    HORIZONTAL,
    VERTICAL,
    apply_placement,
    validate_placement,
)
from dabble.puzzle.board import BonusType, PlacedTile


def tiles(*specs):
    return [PlacedTile(r, c, letter) for r, c, letter in specs]


CAT = tiles((4, 4, "C"), (4, 5, "A"), (4, 6, "T"))


@pytest.fixture
def cat_board(empty_board, words):
    result = validate_placement(empty_board, CAT, True, words)
    assert result.valid
    return apply_placement(empty_board, CAT)


class TestFirstWord:
    def test_cat_on_start_scores_double(self, empty_board, words):
        result = validate_placement(empty_board, CAT, True, words)
        assert result.valid is True
        assert result.error is None
        assert len(result.words) == 1
        word = result.words[0]
        assert word.word == "CAT"
        assert word.direction == HORIZONTAL
        assert (word.start_row, word.start_col) == (4, 4)
        # (C3 + A1 + T1) x2 for the start square
        assert word.score == 10
        assert result.total_score == 10

    def test_must_cover_center(self, empty_board, words):
        result = validate_placement(
            empty_board, tiles((0, 0, "A"), (0, 1, "T")), True, words
        )
        assert result.valid is False
        assert "center" in result.error

    def test_single_tile_is_not_a_word(self, empty_board, words):
        result = validate_placement(empty_board, tiles((4, 4, "A")), True, words)
        assert result.valid is False
        assert "at least 2 letters" in result.error

    def test_tile_order_does_not_matter(self, empty_board, words):
        shuffled = [CAT[2], CAT[0], CAT[1]]
        result = validate_placement(empty_board, shuffled, True, words)
        assert result.valid
        assert result.words[0].word == "CAT"

    def test_lowercase_letters_accepted(self, empty_board, words):
        result = validate_placement(
            empty_board, tiles((4, 4, "c"), (4, 5, "a"), (4, 6, "t")), True, words
        )
        assert result.valid
        assert result.words[0].word == "CAT"

    def test_vertical_word(self, empty_board, words):
        result = validate_placement(
            empty_board, tiles((3, 4, "A"), (4, 4, "T")), True, words
        )
        assert result.valid
        assert result.words[0].direction == VERTICAL
        assert (result.words[0].start_row, result.words[0].start_col) == (3, 4)


class TestRejections:
    def test_no_tiles(self, empty_board, words):
        result = validate_placement(empty_board, [], True, words)
        assert result.valid is False
        assert result.error == "Place some tiles first"

    def test_off_board(self, empty_board, words):
        result = validate_placement(
            empty_board, tiles((4, 4, "A"), (4, 9, "T")), True, words
        )
        assert result.valid is False
        assert "off the board" in result.error

    def test_negative_index_is_off_board(self, empty_board, words):
        result = validate_placement(empty_board, tiles((-1, 4, "A")), True, words)
        assert "off the board" in result.error

    def test_invalid_letter(self, empty_board, words):
        result = validate_placement(
            empty_board, tiles((4, 4, "1"), (4, 5, "T")), True, words
        )
        assert result.valid is False
        assert "Invalid letter" in result.error

    def test_dead_space(self, board_factory, words):
        board = board_factory(dead=[(4, 6)])
        result = validate_placement(board, CAT, True, words)
        assert result.valid is False
        assert "dead space" in result.error

    def test_dead_space_rejected_even_when_otherwise_fine(self, board_factory, words):
        board = board_factory(dead=[(4, 3)])
        result = validate_placement(
            board, tiles((4, 3, "A"), (4, 4, "T")), True, words
        )
        assert "dead space" in result.error

    def test_occupied_cell(self, cat_board, words):
        result = validate_placement(
            cat_board, tiles((4, 4, "B"), (5, 4, "A")), False, words
        )
        assert result.valid is False
        assert "already occupied" in result.error

    def test_duplicate_target(self, empty_board, words):
        result = validate_placement(
            empty_board, tiles((4, 4, "A"), (4, 4, "T")), True, words
        )
        assert result.valid is False
        assert "Two tiles" in result.error

    def test_dead_space_reported_before_duplicate(self, board_factory, words):
        board = board_factory(dead=[(0, 0)])
        result = validate_placement(
            board, tiles((4, 4, "A"), (4, 4, "B"), (0, 0, "C")), True, words
        )
        assert result.error == "Cannot place a tile on dead space at (0, 0)"

    def test_off_board_reported_before_dead_space(self, board_factory, words):
        board = board_factory(dead=[(4, 4)])
        result = validate_placement(
            board, tiles((4, 4, "A"), (4, 9, "T")), True, words
        )
        assert result.error == "Tile at (4, 9) is off the board"

    def test_not_collinear(self, empty_board, words):
        result = validate_placement(
            empty_board, tiles((4, 4, "A"), (5, 5, "T")), True, words
        )
        assert result.valid is False
        assert "single row or column" in result.error

    def test_gap(self, empty_board, words):
        result = validate_placement(
            empty_board, tiles((4, 3, "A"), (4, 5, "T")), True, words
        )
        assert result.valid is False
        assert "no gaps" in result.error

    def test_must_connect(self, cat_board, words):
        placement = tiles((0, 0, "A"), (0, 1, "T"))
        result = validate_placement(cat_board, placement, False, words)
        assert result.valid is False
        assert result.error == "Word must connect to existing words"
        assert cat_board.get(0, 0).letter is None

    def test_diagonal_contact_does_not_connect(self, cat_board, words):
        placement = tiles((3, 7, "A"), (2, 7, "T"))
        result = validate_placement(cat_board, placement, False, words)
        assert result.error == "Word must connect to existing words"

    def test_invalid_word(self, empty_board, words):
        result = validate_placement(
            empty_board, tiles((4, 4, "X"), (4, 5, "Q")), True, words
        )
        assert result.valid is False
        assert result.error == "'XQ' is not a valid word"

    def test_invalid_cross_word_rejects_everything(self, cat_board, words):
        # ON is fine but the column under A reads AO
        placement = tiles((5, 5, "O"), (5, 6, "N"))
        result = validate_placement(cat_board, placement, False, words)
        assert result.valid is False
        assert result.error == "'AO' is not a valid word"
        assert result.words == ()
        assert result.total_score == 0


class TestLaterWords:
    def test_extend_existing_word(self, cat_board, words):
        result = validate_placement(cat_board, tiles((4, 7, "S")), False, words)
        assert result.valid
        assert [w.word for w in result.words] == ["CATS"]
        # Start square already used by C: no double word this time
        assert result.total_score == 6

    def test_word_through_locked_letter(self, cat_board, words):
        result = validate_placement(
            cat_board, tiles((3, 5, "B"), (5, 5, "T")), False, words
        )
        assert result.valid
        assert [w.word for w in result.words] == ["BAT"]
        assert result.words[0].direction == VERTICAL
        assert result.total_score == 5
        assert [t.letter for t in result.words[0].tiles] == ["B", "A", "T"]

    def test_single_tile_below_forms_vertical_word(self, cat_board, words):
        result = validate_placement(cat_board, tiles((5, 6, "O")), False, words)
        assert result.valid
        word = result.words[0]
        assert word.word == "TO"
        assert word.direction == VERTICAL
        assert (word.start_row, word.start_col) == (4, 6)

    def test_cross_words_scored(self, cat_board, words):
        result = validate_placement(
            cat_board, tiles((5, 5, "T"), (5, 6, "O")), False, words
        )
        assert result.valid
        assert [w.word for w in result.words] == ["TO", "AT", "TO"]
        assert result.total_score == 6

    def test_oracle_sees_uppercase(self, empty_board):
        seen = []

        def oracle(word):
            seen.append(word)
            return True

        validate_placement(
            empty_board, tiles((4, 4, "c"), (4, 5, "a"), (4, 6, "t")), True, oracle
        )
        assert seen == ["CAT"]


class TestScoring:
    def test_letter_and_word_multipliers(self, board_factory, words):
        board = board_factory(bonuses={(4, 5): BonusType.DL, (4, 6): BonusType.TW})
        result = validate_placement(board, CAT, True, words)
        # C3 + A1x2 + T1 = 6, x2 (start) x3 (TW) = 36
        assert result.total_score == 36

    def test_bonus_under_locked_letter_not_reused(self, board_factory, words):
        board = board_factory(bonuses={(4, 5): BonusType.TL})
        first = validate_placement(board, CAT, True, words)
        # C3 + A1x3 + T1 = 7, x2 = 14
        assert first.total_score == 14
        board = apply_placement(board, CAT)
        result = validate_placement(board, tiles((4, 7, "S")), False, words)
        assert result.total_score == 6

    def test_cross_word_gets_new_tile_bonus(self, board_factory, words):
        board = board_factory(bonuses={(5, 6): BonusType.DW})
        board = apply_placement(board, CAT)
        result = validate_placement(board, tiles((5, 6, "O")), False, words)
        # TO: (1 + 1) x2
        assert result.total_score == 4


class TestApplyPlacement:
    def test_returns_new_locked_board(self, empty_board):
        new = apply_placement(empty_board, CAT)
        for tile in CAT:
            cell = new.get(tile.row, tile.col)
            assert cell.letter == tile.letter
            assert cell.is_locked is True
        assert empty_board.is_empty

    def test_validate_does_not_mutate(self, empty_board, words):
        validate_placement(empty_board, CAT, True, words)
        assert empty_board.is_empty

    def test_refuses_occupied_cell(self, cat_board):
        with pytest.raises(ValueError):
            apply_placement(cat_board, tiles((4, 4, "B")))

    def test_refuses_dead_cell(self, board_factory):
        board = board_factory(dead=[(0, 0)])
        with pytest.raises(ValueError):
            apply_placement(board, tiles((0, 0, "A")))
