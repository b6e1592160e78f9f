"""
Visual debug overlays for reconstructed cells.

Draws every cell box over the rendered page, colour-coded by the column
it snapped to, so threshold tuning can be checked by eye.
"""

from typing import Sequence

from PIL import Image, ImageDraw, ImageFont

from tabulation.layout.column_aligner import snap_to_column
from tabulation.layout.models import PageCells

from .builder import is_heading

COLUMN_COLORS = [
    (220, 40, 40),
    (50, 160, 50),
    (50, 130, 200),
    (230, 130, 20),
    (160, 100, 200),
    (50, 180, 130),
    (200, 180, 50),
    (180, 120, 100),
]
HEADING_COLOR = (140, 140, 140)


def draw_page_cells(
    image: Image.Image,
    page: PageCells,
    centers: Sequence[float],
    scale: float,
    line_width: int = 2,
) -> Image.Image:
    """
    Outline each cell of *page* on *image* with its column tag.

    Args:
        image:      Page rendered at *scale*.
        page:       Pass-one output for the page (needs ``page_height``).
        centers:    Global column centers.
        scale:      Render scale used to produce *image*.
        line_width: Outline thickness in pixels.

    Returns:
        Annotated RGB copy of *image*.
    """
    img = image.copy()
    draw = ImageDraw.Draw(img, "RGBA")

    try:
        font = ImageFont.truetype(
            "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", 11
        )
    except (OSError, IOError):
        font = ImageFont.load_default()

    for cell_row, boxes in zip(page.cell_rows, page.boxes):
        heading = is_heading(cell_row)

        for box in boxes:
            if not box.text:
                continue

            if heading:
                color = HEADING_COLOR
                tag = "H"
            else:
                col = snap_to_column(box.x0, centers)
                color = COLUMN_COLORS[col % len(COLUMN_COLORS)]
                tag = f"C{col}"

            # Fragment y is baseline, bottom-left origin
            top = page.page_height - box.y - box.height
            bottom = page.page_height - box.y
            x0, y0 = box.x0 * scale, top * scale
            x1, y1 = box.x1 * scale, bottom * scale

            draw.rectangle([x0, y0, x1, y1], fill=(*color, 30))
            for i in range(line_width):
                draw.rectangle([x0 - i, y0 - i, x1 + i, y1 + i], outline=color)

            tw, th = draw.textbbox((0, 0), tag, font=font)[2:]
            draw.rectangle([x0, y0 - th - 3, x0 + tw + 4, y0], fill=(*color, 220))
            draw.text((x0 + 2, y0 - th - 2), tag, fill=(255, 255, 255), font=font)

    return img.convert("RGB")
