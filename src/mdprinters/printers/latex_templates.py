#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/printers/latex_templates.py
r"""LaTeX snippets emitted by the LaTeX printer.

Every function here is pure: it receives already escaped text and returns a
self-contained block of LaTeX. The generated source expects these packages
in the preamble: ``float`` (``[H]``), ``graphicx``, ``longtable``,
``minted``, ``hyperref``, ``ulem`` (``\sout``), ``amsmath``, ``pdflscape``
and ``multicol``.

"""

from __future__ import annotations

from typing import Optional

from mdprinters.constants import TextInterpretation
from mdprinters.options.latex import LatexMarginOptions

HEADING_COMMANDS = {
    1: "\\section{{\\uppercase{{{text}}}}}",
    2: "\\subsection{{{text}}}",
    3: "\\subsubsection{{{text}}}",
    4: "\\paragraph{{{text}}}",
}
FALLBACK_HEADING_COMMAND = "\\subparagraph{{{text}}}"


def _setlength(name: str, value: str) -> str:
    return f"\\setlength{{\\{name}}}{{{value}}}\n"


def _caption(label: str, number: int, separator: str, title: str) -> str:
    return f"{label} {number}{separator}{title}"


def latex_heading(text: str, depth: int) -> Optional[str]:
    """Sectioning command for a heading, None if the depth has no command."""
    template = HEADING_COMMANDS.get(depth)
    if template is None:
        return None
    return f"\n{template.format(text=text)}\n"


def latex_fallback_heading(text: str) -> str:
    return f"\n{FALLBACK_HEADING_COMMAND.format(text=text)}\n"


def latex_interpret(text: str, mode: TextInterpretation) -> str:
    """Decorate already escaped text according to an interpretation mode."""
    if mode == "monospace":
        return f"\\texttt{{{text}}}"
    if mode == "bold":
        return f"\\textbf{{{text}}}"
    if mode == "italic":
        return f"\\textit{{{text}}}"
    if mode == "underline":
        return f"\\underline{{{text}}}"
    if mode == "quotes":
        return f"<<{text}>>"
    return text


def latex_link(text: str, href: str, escaped_href: str, mode: TextInterpretation) -> str:
    r"""Render a link.

    ``default`` produces ``\href``; the other modes print the link text
    decorated, followed by the decorated address in parentheses when the
    text differs from it.
    """
    if mode == "default":
        return f"\\href{{{href}}}{{{text or escaped_href}}}"
    if not text or text == escaped_href:
        return latex_interpret(escaped_href, mode)
    return f"{text} ({latex_interpret(escaped_href, mode)})"


def latex_code_span(text: str, mode: TextInterpretation) -> str:
    """Inline code; ``default`` means monospace."""
    return latex_interpret(text, "monospace" if mode == "default" else mode)


def latex_list_item(text: str, marker: str, depth: int, indent: Optional[str]) -> str:
    """One list item as its own paragraph, indented by nesting depth."""
    prefix = f"\\hspace*{{{indent}}}" if indent and depth > 1 else ""
    return f"\n\n{prefix}{marker}~{text.strip()}\n"


def latex_math(text: str, margin: LatexMarginOptions, tag: Optional[int] = None) -> str:
    """Display math with the configured display skips, optionally numbered."""
    body = text.strip()
    if tag is not None:
        body = f"{body} \\tag{{{tag}}}"
    return (
        "\n"
        + _setlength("abovedisplayskip", margin.math_above_display_skip)
        + _setlength("belowdisplayskip", margin.math_below_display_skip)
        + _setlength("abovedisplayshortskip", margin.math_above_display_short_skip)
        + _setlength("belowdisplayshortskip", margin.math_below_display_short_skip)
        + f"\\begin{{align*}}\n{body}\n\\end{{align*}}\n"
    )


def latex_inline_math(text: str) -> str:
    return f"$\\displaystyle {text.strip()}$"


def latex_code(
    *,
    number: int,
    title: str,
    lang: str,
    code: str,
    remove_space: bool,
    label: str,
    separator: str,
    margin: LatexMarginOptions,
) -> str:
    """Numbered listing inside a non-floating figure."""
    spacing = _setlength("intextsep", margin.code_inner_text_sep) + _setlength(
        "belowcaptionskip", margin.code_below_caption_skip
    )
    if remove_space:
        spacing += f"\\addtolength{{\\belowcaptionskip}}{{{margin.code_removed_below_caption_skip}}}\n"
    spacing += _setlength("abovecaptionskip", margin.code_above_caption_skip)
    return (
        f"\n{spacing}"
        "\\begin{figure}[H]\n"
        f"\\begin{{minted}}[breaklines]{{{lang}}}\n"
        f"{code.rstrip()}\n"
        "\\end{minted}\n"
        f"\\caption*{{{_caption(label, number, separator, title)}}}\n"
        "\\end{figure}\n"
    )


def latex_table(
    *,
    number: int,
    title: str,
    header: str,
    content: str,
    col_amount: int,
    remove_space: bool,
    label: str,
    separator: str,
    margin: LatexMarginOptions,
) -> str:
    """Numbered longtable with its header repeated on every page."""
    columns = "|" + "c|" * max(col_amount, 1)
    post = margin.table_removed_post if remove_space else margin.table_post
    return (
        "\n"
        + _setlength("LTpre", margin.table_pre)
        + _setlength("LTpost", post)
        + _setlength("belowcaptionskip", margin.table_below_caption_skip)
        + _setlength("abovecaptionskip", margin.table_above_caption_skip)
        + f"\\begin{{longtable}}{{{columns}}}\n"
        + f"\\caption*{{{_caption(label, number, separator, title)}}} \\\\\n"
        + "\\hline\n"
        + header
        + "\\endfirsthead\n"
        + "\\hline\n"
        + header
        + "\\endhead\n"
        + content
        + "\\end{longtable}\n"
    )


def latex_image(
    *,
    number: int,
    title: str,
    href: str,
    width: Optional[str],
    height: Optional[str],
    remove_space: bool,
    label: str,
    separator: str,
    margin: LatexMarginOptions,
) -> str:
    """Numbered picture inside a non-floating figure."""
    size = ",".join(f"{key}={value}" for key, value in (("width", width), ("height", height)) if value)
    graphics_options = f"[{size}]" if size else ""
    spacing = _setlength("intextsep", margin.image_inner_text_sep) + _setlength(
        "belowcaptionskip", margin.image_below_caption_skip
    )
    if remove_space:
        spacing += f"\\addtolength{{\\belowcaptionskip}}{{{margin.image_removed_below_caption_skip}}}\n"
    spacing += _setlength("abovecaptionskip", margin.image_above_caption_skip)
    return (
        f"\n{spacing}"
        "\\begin{figure}[H]\n"
        "\\centering\n"
        f"\\includegraphics{graphics_options}{{{href}}}\n"
        f"\\caption*{{{_caption(label, number, separator, title)}}}\n"
        "\\end{figure}\n"
    )


def _application_heading(label: str, letter: str) -> str:
    heading = f"{label} {letter}"
    return (
        "\n\\newpage\n"
        f"\\section*{{\\centering\\uppercase{{{heading}}}}}\n"
        f"\\addcontentsline{{toc}}{{section}}{{{heading}}}\n"
    )


def latex_raw_application(letter: str, content: str, label: str) -> str:
    """Appendix whose body is already printed LaTeX."""
    return f"{_application_heading(label, letter)}{content}\n"


def latex_picture_application(letter: str, title: str, href: str, rotated: bool, label: str) -> str:
    """Appendix made of one picture; rotated pictures get a landscape page."""
    if rotated:
        return (
            f"{_application_heading(label, letter)}"
            "\\begin{landscape}\n"
            "\\begin{figure}[H]\n"
            "\\centering\n"
            f"\\includegraphics[width=\\linewidth,height=0.8\\textheight,keepaspectratio]{{{href}}}\n"
            f"\\caption*{{{title}}}\n"
            "\\end{figure}\n"
            "\\end{landscape}\n"
        )
    return (
        f"{_application_heading(label, letter)}"
        "\\begin{figure}[H]\n"
        "\\centering\n"
        f"\\includegraphics[width=\\linewidth]{{{href}}}\n"
        f"\\caption*{{{title}}}\n"
        "\\end{figure}\n"
    )


def latex_code_application(letter: str, path: str, lang: str, columns: int, label: str) -> str:
    """Appendix listing a source file, optionally in several columns."""
    listing = f"\\inputminted[breaklines,fontsize=\\small]{{{lang}}}{{{path}}}\n"
    if columns > 1:
        listing = f"\\begin{{multicols}}{{{columns}}}\n{listing}\\end{{multicols}}\n"
    return f"{_application_heading(label, letter)}{listing}"
