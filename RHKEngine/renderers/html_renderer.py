"""
HTML print view for a composed ReportDocument.

One `.sheet` per page, sized to A4 with a page break after each, so the
browser's print dialog produces the final document. Colors come from the
render tokens (palette references resolved to hex here), the roster table
sizes from the density metrics. All payload text is escaped.
"""

from __future__ import annotations

import html
from typing import Any, List

from loguru import logger

from .theme_resolver import BorderStyle, RenderTokens, palette_hex


class HTMLRenderer:
    """
    Renders ReportDocument values to a self-contained HTML string.

    Usage:
        html_text = HTMLRenderer().render(document)
    """

    def render(self, document) -> str:
        """
        Render the whole document.

        Args:
            document: ReportDocument from ReportComposer.

        Returns:
            str: complete HTML document, ready to write to disk or serve.
        """
        tokens = document.tokens
        extra_css = [self._density_css(page.metrics) for page in document.pages if page.kind == "roster"]
        head = self._render_head(document.display_title, tokens, extra_css)
        sheets = []
        for page in document.pages:
            renderer = getattr(self, f"_render_{page.kind}_page", None)
            if renderer is None:
                logger.warning(f"no renderer for page kind '{page.kind}', skipped")
                continue
            sheets.append(renderer(page, tokens))
        body = self._render_body(sheets)
        logger.debug(f"rendered {len(sheets)} sheets for '{document.display_title}'")
        return f"<!DOCTYPE html>\n<html lang=\"id\">\n{head}\n{body}\n</html>\n"

    # ====== Document frame ======

    def _render_head(self, title: str, tokens: RenderTokens, extra_css: List[str]) -> str:
        css = "\n".join([self._build_css(tokens), *extra_css])
        return (
            "<head>\n"
            '<meta charset="utf-8">\n'
            f"<title>{self._escape_html(title)}</title>\n"
            f"<style>\n{css}\n</style>\n"
            "</head>"
        )

    def _render_body(self, sheets: List[str]) -> str:
        return "<body>\n" + "\n".join(sheets) + "\n</body>"

    # ====== Pages ======

    def _render_cover_page(self, page, tokens: RenderTokens) -> str:
        title_html = "<br>".join(self._escape_html(line) for line in page.cover_title_lines)
        pattern = ""
        if tokens.pattern_path:
            pattern = (
                '<svg class="cover-pattern" viewBox="0 0 24 24" aria-hidden="true">'
                f'<path d="{self._escape_attr(tokens.pattern_path)}"/></svg>'
            )
        id_line = f"NIP. {page.id_number}" if page.id_number else "-"
        logo = ""
        if page.logo_url:
            logo = f'<img class="cover-logo" src="{self._escape_attr(page.logo_url)}" alt="Logo Kementerian Agama">'
        return (
            '<section class="sheet cover">'
            f"{pattern}"
            '<div class="cover-frame">'
            '<div class="cover-top">'
            f'<h1 class="cover-title">{title_html}</h1>'
            f'<h2 class="cover-subtitle">{self._escape_html(page.chosen_title)}</h2>'
            "</div>"
            '<div class="cover-middle">'
            f"{logo}"
            f'<p class="cover-period">Periode: {self._escape_html(page.period)}</p>'
            "</div>"
            '<div class="cover-author">'
            f'<p class="label">{self._escape_html(page.author_label)}:</p>'
            f'<h3 class="author-name">{self._escape_html(page.author_name)}</h3>'
            f'<p class="author-id">{self._escape_html(id_line)}</p>'
            "</div>"
            '<div class="cover-unit">'
            f"<h4>{self._escape_html(page.unit)}</h4>"
            f'<p class="locality">{self._escape_html(page.locality)}</p>'
            f'<p class="year">{page.year}</p>'
            "</div>"
            "</div>"
            "</section>"
        )

    def _render_narrative_page(self, page, tokens: RenderTokens) -> str:
        container = tokens.section_style.container
        blocks = []
        for block in page.blocks:
            if block.kind == "list":
                items = "".join(f"<li>{self._escape_html(item)}</li>" for item in block.content)
                body = f'<ul class="section-list container-{container}">{items}</ul>'
            else:
                body = "".join(
                    f'<p class="section-paragraph">{self._escape_html(text)}</p>' for text in block.content
                )
            blocks.append(
                '<div class="section">'
                f'<h3 class="section-title">{self._escape_html(block.heading)}</h3>'
                f"{body}</div>"
            )
        return (
            '<section class="sheet narrative">'
            '<header class="page-header">'
            f"<h2>{self._escape_html(page.heading)}</h2>"
            f"<p>{self._escape_html(page.activity_type)}</p>"
            "</header>"
            f'<div class="sections">{"".join(blocks)}</div>'
            '<p class="page-note">(Dokumentasi dan Pengesahan di halaman berikutnya)</p>'
            "</section>"
        )

    def _render_evidence_page(self, page, tokens: RenderTokens) -> str:
        if page.image:
            figure = (
                '<div class="evidence-frame">'
                f'<img src="{self._escape_attr(page.image)}" alt="Bukti Kegiatan">'
                "</div>"
            )
        else:
            figure = ""
        caption = f"{page.figure_label}: {page.caption}" if page.caption else page.figure_label
        return (
            '<section class="sheet evidence">'
            f'<p class="attachment-note">{self._escape_html(page.attachment_note)}</p>'
            f'<h3 class="section-title">{self._escape_html(page.heading)}</h3>'
            f"{figure}"
            f'<p class="figure-caption">{self._escape_html(caption)}</p>'
            f"{self._render_signature(page.signature)}"
            "</section>"
        )

    def _render_roster_page(self, page, tokens: RenderTokens) -> str:
        head = "".join(f"<th>{self._escape_html(col)}</th>" for col in page.columns)
        rows = "".join(
            "<tr>"
            f'<td class="num">{row.number}</td>'
            f"<td>{self._escape_html(row.name)}</td>"
            f'<td class="grade">{self._escape_html(row.grade_label)}</td>'
            f'<td class="remark">{self._escape_html(row.remark)}</td>'
            "</tr>"
            for row in page.rows
        )
        meta = []
        if page.class_name:
            meta.append(f"<p>Kelas: {self._escape_html(page.class_name)}</p>")
        if page.principle:
            meta.append(f'<p class="principle">{self._escape_html(page.principle)}</p>')
        return (
            f'<section class="sheet roster density-{page.metrics.tier}">'
            '<header class="page-header">'
            f"<h2>{self._escape_html(page.title)}</h2>"
            f"{''.join(meta)}"
            "</header>"
            f'<table class="roster-table"><thead><tr>{head}</tr></thead><tbody>{rows}</tbody></table>'
            f"{self._render_signature(page.signature)}"
            "</section>"
        )

    def _render_signature(self, signature) -> str:
        return (
            '<div class="signature">'
            f"<p>{self._escape_html(signature.locality)}, {self._escape_html(signature.date_text)}</p>"
            f'<p class="role">{self._escape_html(signature.role)}</p>'
            f'<p class="signer">{self._escape_html(signature.name)}</p>'
            f"<p>{self._escape_html(signature.id_line)}</p>"
            "</div>"
        )

    # ====== CSS ======

    def _border_css(self, border: BorderStyle) -> str:
        color = palette_hex(border.color)
        rule = f"{border.width}px {border.style} {color}"
        if border.sides == "x":
            lines = [f"border-left: {rule};", f"border-right: {rule};"]
        else:
            lines = [f"border: {rule};"]
        if border.ring is not None:
            ring = border.ring
            lines.append(f"outline: {ring.width}px solid {palette_hex(ring.color)};")
            lines.append(f"outline-offset: {ring.offset}px;")
        return " ".join(lines)

    def _build_css(self, tokens: RenderTokens) -> str:
        primary = palette_hex(tokens.primary)
        accent = palette_hex(tokens.accent)
        header = palette_hex(tokens.header_color)
        gradient_from, gradient_to = (palette_hex(ref) for ref in tokens.bg_gradient)
        style = tokens.section_style
        title_color = palette_hex(style.title_color)
        container_color = palette_hex(style.container_color)
        rule_color = palette_hex(tokens.border.rule_color)

        container_rules = {
            "plain": "",
            "card": f"border: 1px solid {container_color}; border-radius: 6px; padding: 8px 12px 8px 28px;",
            "tinted": f"background: {container_color}; border-radius: 6px; padding: 8px 12px 8px 28px;",
            "ruled": f"border-left: 3px solid {container_color}; padding-left: 28px;",
        }
        return "\n".join(
            [
                "@page { size: A4; margin: 0; }",
                "* { box-sizing: border-box; }",
                "body { margin: 0; background: #e5e7eb; font-family: 'Times New Roman', Georgia, serif; color: #111827; }",
                ".sheet { position: relative; width: 210mm; min-height: 297mm; padding: 25mm; margin: 0 auto 8mm;"
                " background: #ffffff; overflow: hidden; page-break-after: always; break-after: page; }",
                ".sheet:last-child { page-break-after: auto; break-after: auto; }",
                "@media print { body { background: none; } .sheet { margin: 0; box-shadow: none; } }",
                f".cover {{ background: linear-gradient(180deg, {gradient_from}, {gradient_to}); }}",
                f".cover-pattern {{ position: absolute; inset: 20%; width: 60%; height: 60%; fill: {accent}; opacity: 0.06; }}",
                ".cover-frame { position: relative; display: flex; flex-direction: column; justify-content: space-between;"
                f" align-items: center; text-align: center; min-height: 247mm; padding: 8mm; {self._border_css(tokens.border)} }}",
                f".cover-title {{ font-size: 22px; letter-spacing: 0.15em; text-transform: uppercase; color: {primary}; line-height: 1.6; }}",
                f".cover-subtitle {{ font-size: 18px; text-transform: uppercase; color: {header}; }}",
                ".cover-period { font-size: 16px; font-weight: 600; text-transform: uppercase; letter-spacing: 0.08em; }",
                ".cover-middle { display: flex; flex-direction: column; align-items: center; }",
                ".cover-logo { width: 32mm; height: auto; margin-bottom: 6mm; object-fit: contain; }",
                ".cover-author .label { font-size: 12px; letter-spacing: 0.2em; text-transform: uppercase; color: #6b7280; }",
                f".author-name {{ display: inline-block; min-width: 50%; border-bottom: 2px solid {rule_color}; padding-bottom: 6px; }}",
                ".author-id { font-family: monospace; }",
                ".cover-unit h4 { font-size: 18px; text-transform: uppercase; margin: 0; }",
                ".cover-unit .locality { text-transform: uppercase; color: #4b5563; }",
                f".page-header {{ text-align: center; border-bottom: 2px solid {primary}; padding-bottom: 10px; margin-bottom: 18px; }}",
                ".page-header h2 { font-size: 17px; text-transform: uppercase; margin: 0; }",
                f".section-title {{ font-size: 16px; color: {title_color}; border-bottom: 1px solid #e5e7eb; padding-bottom: 4px; }}",
                ".section-paragraph { text-align: justify; line-height: 1.7; }",
                f".section-list {{ list-style: none; {container_rules.get(style.container, '')} }}",
                f".section-list li::before {{ content: '{style.bullet} '; color: {title_color}; margin-left: -16px; }}",
                ".page-note { text-align: right; font-size: 11px; font-style: italic; color: #9ca3af; }",
                ".attachment-note { text-align: right; font-size: 11px; font-style: italic; color: #9ca3af;"
                " border-bottom: 1px solid #d1d5db; padding-bottom: 6px; }",
                ".evidence-frame { border: 1px solid #d1d5db; background: #f9fafb; border-radius: 8px; padding: 12px;"
                " max-height: 140mm; display: flex; align-items: center; justify-content: center; overflow: hidden; }",
                ".evidence-frame img { max-width: 100%; max-height: 130mm; object-fit: contain; }",
                ".figure-caption { text-align: center; font-size: 13px; font-style: italic; color: #6b7280; }",
                ".signature { width: 64mm; margin: 12mm 0 0 auto; text-align: center; }",
                ".signature .role { margin-bottom: 22mm; }",
                ".signature .signer { font-weight: bold; text-decoration: underline; }",
                ".roster-table { width: 100%; border-collapse: collapse; }",
                f".roster-table th {{ background: {header}; color: #ffffff; }}",
                ".roster-table th, .roster-table td { border: 1px solid #9ca3af; }",
                ".roster-table td.num, .roster-table td.grade { text-align: center; }",
            ]
        )

    def _density_css(self, metrics) -> str:
        """CSS rules sizing one roster table from its density metrics."""
        return (
            f".density-{metrics.tier} .roster-table th {{ font-size: {metrics.font_size_header}px;"
            f" padding: {metrics.header_padding}px 6px; }}\n"
            f".density-{metrics.tier} .roster-table td {{ font-size: {metrics.font_size_body}px;"
            f" padding: {metrics.cell_padding}px 6px; line-height: {metrics.row_line_height}; }}\n"
            f".density-{metrics.tier} .roster-table td.remark {{ font-size: {metrics.font_size_description}px;"
            f" line-height: {metrics.description_line_height}; }}"
        )

    # ====== Escaping ======

    def _safe_text(self, value: Any) -> str:
        return "" if value is None else str(value)

    def _escape_html(self, value: Any) -> str:
        return html.escape(self._safe_text(value), quote=False)

    def _escape_attr(self, value: Any) -> str:
        escaped = html.escape(self._safe_text(value), quote=True)
        return escaped.replace("\n", " ").replace("\r", " ")


__all__ = ["HTMLRenderer"]
