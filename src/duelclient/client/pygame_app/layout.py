from __future__ import annotations

# Screen geometry for the match board, as plain (x, y, w, h) boxes.

Box = tuple[int, int, int, int]

MAX_FIELD_SLOTS = 7
FIELD_X0 = 40
SLOT_W, SLOT_H, SLOT_GAP = 100, 90, 8
CARD_W, CARD_H, CARD_GAP = 100, 120, 8
HAND_Y = 470
CARD_LIFT = 20

LOG_BOX: Box = (816, 80, 196, 560)


def hand_card_step(hand_len: int) -> int:
    """Horizontal distance between hand cards.

    Full spacing while the hand fits left of the log panel; beyond that the
    cards overlap so the last one still ends before the panel.
    """
    room = LOG_BOX[0] - CARD_GAP - FIELD_X0 - CARD_W
    return min(CARD_W + CARD_GAP, room // max(hand_len - 1, 1))


def hand_card_box(index: int, hand_len: int, lifted: bool = False) -> Box:
    y = HAND_Y - CARD_LIFT if lifted else HAND_Y
    return (FIELD_X0 + index * hand_card_step(hand_len), y, CARD_W, CARD_H)


def box_contains(box: Box, pos: tuple[int, int]) -> bool:
    x, y, w, h = box
    return x <= pos[0] < x + w and y <= pos[1] < y + h


def hand_index_at(pos: tuple[int, int], hand_len: int, lifted_index: int | None = None) -> int | None:
    # Later cards are drawn on top, so they win where cards overlap.
    for i in reversed(range(hand_len)):
        if box_contains(hand_card_box(i, hand_len, lifted=i == lifted_index), pos):
            return i
    return None
