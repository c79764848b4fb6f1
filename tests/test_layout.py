from __future__ import annotations

from duelclient.client.pygame_app.layout import (
    CARD_GAP,
    CARD_H,
    CARD_LIFT,
    CARD_W,
    FIELD_X0,
    HAND_Y,
    LOG_BOX,
    hand_card_box,
    hand_card_step,
    hand_index_at,
)


def _center(box: tuple[int, int, int, int]) -> tuple[int, int]:
    x, y, w, h = box
    return (x + w // 2, y + h // 2)


def test_small_hand_keeps_full_spacing() -> None:
    assert hand_card_step(0) == CARD_W + CARD_GAP
    assert hand_card_step(1) == CARD_W + CARD_GAP
    assert hand_card_step(5) == CARD_W + CARD_GAP
    assert hand_card_box(2, 5) == (FIELD_X0 + 2 * (CARD_W + CARD_GAP), HAND_Y, CARD_W, CARD_H)


def test_full_hand_stays_left_of_log_panel() -> None:
    for hand_len in range(1, 11):
        x, _, w, _ = hand_card_box(hand_len - 1, hand_len)
        assert x + w <= LOG_BOX[0]
    assert hand_card_step(10) < CARD_W + CARD_GAP


def test_selected_card_is_lifted() -> None:
    assert hand_card_box(3, 4, lifted=True)[1] == HAND_Y - CARD_LIFT
    assert hand_card_box(3, 4)[1] == HAND_Y


def test_every_card_in_a_full_hand_is_clickable() -> None:
    step = hand_card_step(10)
    for i in range(10):
        x, y, _, h = hand_card_box(i, 10)
        # the strip of card i not covered by card i + 1
        assert hand_index_at((x + step // 2, y + h // 2), 10) == i


def test_overlapping_cards_resolve_to_the_top_one() -> None:
    x, y, _, h = hand_card_box(4, 10)
    assert hand_index_at((x + 1, y + h // 2), 10) == 4
    assert hand_index_at((x - 1, y + h // 2), 10) == 3


def test_clicks_outside_the_hand_miss() -> None:
    assert hand_index_at(_center(LOG_BOX), 10) is None
    assert hand_index_at((FIELD_X0 - 1, HAND_Y + 10), 3) is None
    assert hand_index_at(_center(hand_card_box(0, 3)), 0) is None


def test_lifted_card_is_hit_above_the_hand_row() -> None:
    x, _, _, _ = hand_card_box(2, 3, lifted=True)
    pos = (x + 10, HAND_Y - CARD_LIFT + 5)

    assert hand_index_at(pos, 3) is None
    assert hand_index_at(pos, 3, lifted_index=2) == 2
