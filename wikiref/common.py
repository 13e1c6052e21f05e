# Some definitions used for both serializing and parsing resource references
#
# Copyright (c) 2020-2022 Tatu Ylonen.  See file LICENSE and https://ylonen.org

# Character used to escape separators (and itself) inside reference parts.
ESCAPE_CHAR: str = "\\"

# Separators between the parts of a reference: TARGET#ANCHOR?QUERY and
# TARGET@WIKI for interwiki references.
SEPARATOR_ANCHOR: str = "#"
SEPARATOR_QUERYSTRING: str = "?"
SEPARATOR_INTERWIKI: str = "@"

# Separator between an explicit type prefix and the reference, as in
# "unc:\\server\share" or "mailto:john@example.com"
TYPE_SEPARATOR: str = ":"

# Parameter names recognized by the document and interwiki codecs
ANCHOR: str = "anchor"
QUERY_STRING: str = "queryString"
INTERWIKI_ALIAS: str = "interWikiAlias"

# Registration token of the document codec in XWiki 2.0 link syntax
XWIKI20_DOC_TOKEN: str = "xwiki/2.0/doc"
