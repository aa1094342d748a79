"""Геометрия видимой части изображения на канве (без зависимостей от tkinter)."""
from __future__ import annotations

import math
from typing import NamedTuple, Optional, Tuple


class VisibleRegion(NamedTuple):
    box: Tuple[int, int, int, int]  # (left, top, right, bottom) в пикселях изображения
    size: Tuple[int, int]           # размер фрагмента на экране
    offset: Tuple[int, int]         # левый верхний угол фрагмента на канве


def visible_region(
    image_size: Tuple[int, int],
    scale: float,
    top_left: Tuple[int, int],
    canvas_size: Tuple[int, int],
) -> Optional[VisibleRegion]:
    """Часть изображения, попадающая на канву при масштабе `scale`.

    Масштабировать нужно только её: размер результата ограничен размером канвы
    плюс один пиксель изображения с каждой стороны, каким бы ни был зум.
    """
    img_w, img_h = image_size
    ox, oy = top_left
    canvas_w, canvas_h = canvas_size

    left = max(0, math.floor(-ox / scale))
    top = max(0, math.floor(-oy / scale))
    right = min(img_w, math.ceil((canvas_w - ox) / scale))
    bottom = min(img_h, math.ceil((canvas_h - oy) / scale))
    if right <= left or bottom <= top:
        return None

    x0, y0 = int(round(left * scale)), int(round(top * scale))
    x1, y1 = int(round(right * scale)), int(round(bottom * scale))
    return VisibleRegion(
        box=(left, top, right, bottom),
        size=(max(1, x1 - x0), max(1, y1 - y0)),
        offset=(ox + x0, oy + y0),
    )
