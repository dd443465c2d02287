"""
procedure_xml — wczytywanie dokumentów procedur w formacie XML.

Publiczne API:
  parse_procedure(markup)        → Procedure
  parse_procedure_file(path)     → Procedure
  parse_procedure_url(url)       → Procedure
  normalize_text(text)           → tekst ze znormalizowanymi białymi znakami

Format::

    <procedure title="Upgrade">
      <section num="1" title="Preparation">
        <precis>Get everyone ready.</precis>
        <step num="1"><title>Notify users</title>
          <name who="joe"><task>Send email</task></name>
        </step>
      </section>
    </procedure>
"""

from .parser import (
    normalize_text,
    parse_procedure,
    parse_procedure_file,
    parse_procedure_url,
)

__all__ = [
    "normalize_text",
    "parse_procedure",
    "parse_procedure_file",
    "parse_procedure_url",
]
