from io import BytesIO
from typing import Any, Dict

from pptx import Presentation
from pptx.util import Inches, Pt

from feasibility.exporters.table import view_frame


def build_ppt(view: Dict[str, Any], title: str = "Campaign Feasibility") -> BytesIO:
    prs = Presentation()
    prs.slide_width = Inches(13.333)
    prs.slide_height = Inches(7.5)

    slide = prs.slides.add_slide(prs.slide_layouts[0])
    slide.shapes.title.text = view.get("title") or title
    slide.placeholders[1].text = f"{title} – {view['kind']} – {len(view['rows'])} segment(s)"

    df = view_frame(view)
    slide = prs.slides.add_slide(prs.slide_layouts[5])
    slide.shapes.title.text = view.get("title") or title
    shape = slide.shapes.add_table(
        len(df) + 1, len(df.columns),
        Inches(0.3), Inches(1.4), Inches(12.7), Inches(0.4) * (len(df) + 1),
    )
    table = shape.table
    for j, col in enumerate(df.columns):
        table.cell(0, j).text = str(col)
    for i, rec in enumerate(df.itertuples(index=False), start=1):
        for j, value in enumerate(rec):
            table.cell(i, j).text = str(value)
    for row in table.rows:
        for cell in row.cells:
            for p in cell.text_frame.paragraphs:
                for run in p.runs:
                    run.font.size = Pt(10)

    bio = BytesIO()
    prs.save(bio)
    bio.seek(0)
    return bio
