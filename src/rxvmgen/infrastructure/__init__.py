"""Infrastructure layer — declaration parsing, formatting, templates, file I/O.

Parsing produces the node shapes from :mod:`rxvmgen.domain.syntax`; the
service layer bridges between these collaborators and the domain core.
"""
