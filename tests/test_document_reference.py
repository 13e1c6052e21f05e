# Tests for serializing and parsing document references
#
# Copyright (c) 2020-2022 Tatu Ylonen.  See file LICENSE and https://ylonen.org

import itertools
import unittest
from concurrent.futures import ThreadPoolExecutor

from wikiref.common import ANCHOR, QUERY_STRING
from wikiref.parser import find_unescaped, parse_document_reference
from wikiref.reference import (
    ResourceReference,
    ResourceType,
    document_reference,
)
from wikiref.serializer import serialize_document_reference


class DocumentReferenceTests(unittest.TestCase):
    def setUp(self) -> None:
        parse_document_reference.cache_clear()

    def roundtrip(self, ref: ResourceReference, expected: str) -> None:
        text = serialize_document_reference(ref)
        self.assertEqual(text, expected)
        self.assertEqual(parse_document_reference(text), ref)

    def test_escaped_anchor_separator_in_target(self):
        self.roundtrip(document_reference("A#B"), r"A\#B")

    def test_anchor_and_query(self):
        self.roundtrip(
            document_reference("Doc", anchor="sec?1", query_string="a=b#c"),
            r"Doc#sec\?1?a=b\#c",
        )

    def test_backslash_in_anchor(self):
        ref = document_reference("Doc", anchor="C:\\Path")
        self.roundtrip(ref, r"Doc#C:\\Path")
        self.assertEqual(
            parse_document_reference(r"Doc#C:\\Path").anchor, "C:\\Path"
        )

    def test_backslash_in_query(self):
        self.roundtrip(
            document_reference("Doc", query_string="C:\\Path"),
            r"Doc?C:\\Path",
        )

    def test_backslash_in_target(self):
        self.roundtrip(document_reference("C:\\Path"), "C:\\Path")

    def test_only_query(self):
        ref = parse_document_reference("?x=1")
        self.assertEqual(ref.reference, "")
        self.assertEqual(ref.query_string, "x=1")
        self.assertIsNone(ref.anchor)
        self.roundtrip(document_reference("", query_string="x=1"), "?x=1")

    def test_only_anchor(self):
        self.roundtrip(document_reference("", anchor="top"), "#top")

    def test_empty(self):
        ref = parse_document_reference("")
        self.assertEqual(ref.type, ResourceType.DOCUMENT)
        self.assertEqual(ref.reference, "")
        self.assertEqual(dict(ref.parameters), {})
        self.assertEqual(serialize_document_reference(ref), "")

    def test_empty_parts_are_kept(self):
        self.roundtrip(
            document_reference("Doc", anchor="", query_string=""), "Doc#?"
        )
        self.roundtrip(document_reference("Doc", anchor=""), "Doc#")

    def test_absent_parts_are_omitted(self):
        ref = parse_document_reference("Doc")
        self.assertNotIn(ANCHOR, ref.parameters)
        self.assertNotIn(QUERY_STRING, ref.parameters)

    def test_interwiki_separator_escaped(self):
        self.roundtrip(
            document_reference("Page@wiki", anchor="a@b"), r"Page\@wiki#a\@b"
        )

    def test_anchor_serialized_before_query(self):
        ref = ResourceReference(
            ResourceType.DOCUMENT,
            "Doc",
            [(QUERY_STRING, "q"), (ANCHOR, "a")],
        )
        self.assertEqual(serialize_document_reference(ref), "Doc#a?q")
        self.assertEqual(
            list(parse_document_reference("Doc#a?q").parameters),
            [ANCHOR, QUERY_STRING],
        )

    def test_other_parameters_not_serialized(self):
        ref = document_reference("Doc").with_parameter("format", "pdf")
        self.assertEqual(serialize_document_reference(ref), "Doc")

    def test_escaped_escape_before_separator(self):
        ref = parse_document_reference(r"Doc#a\\?q")
        self.assertEqual(ref.anchor, "a\\")
        self.assertEqual(ref.query_string, "q")
        self.roundtrip(
            document_reference("Doc", anchor="a\\", query_string="q"),
            r"Doc#a\\?q",
        )

    def test_even_escapes_in_target(self):
        # The target context does not unescape the escape character
        ref = parse_document_reference(r"Doc\\#a")
        self.assertEqual(ref.reference, r"Doc\\")
        self.assertEqual(ref.anchor, "a")

    def test_target_ending_in_escape_char_absorbs_separator(self):
        # The target table does not escape the escape character, so a
        # target ending in one cannot be told apart from an escaped
        # separator.
        ref = document_reference("a\\", anchor="x")
        text = serialize_document_reference(ref)
        self.assertEqual(text, r"a\#x")
        self.assertEqual(
            parse_document_reference(text), document_reference("a#x")
        )

    def test_trailing_escape_in_target(self):
        with self.assertLogs("wikiref", level="DEBUG") as cm:
            ref = parse_document_reference("Trailing\\")
        self.assertEqual(ref.reference, "Trailing\\")
        self.assertIn("trailing escape character", cm.output[0])

    def test_trailing_escape_in_anchor(self):
        ref = parse_document_reference("Doc#sec\\")
        self.assertEqual(ref.reference, "Doc")
        self.assertEqual(ref.anchor, "sec\\")

    def test_trailing_escape_in_query(self):
        ref = parse_document_reference("Doc#sec?q\\")
        self.assertEqual(ref.anchor, "sec")
        self.assertEqual(ref.query_string, "q\\")

    def test_query_before_anchor(self):
        with self.assertLogs("wikiref", level="DEBUG"):
            ref = parse_document_reference("Doc?q=1#frag")
        self.assertEqual(
            ref, document_reference("Doc", anchor="frag", query_string="q=1")
        )
        self.assertEqual(serialize_document_reference(ref), "Doc#frag?q=1")

    def test_query_before_anchor_repeated_separators(self):
        ref = parse_document_reference("Doc?a?b#c#d")
        self.assertEqual(ref.reference, "Doc")
        self.assertEqual(ref.query_string, "a?b")
        self.assertEqual(ref.anchor, "c#d")

    def test_anchor_before_query_repeated_separators(self):
        ref = parse_document_reference("Doc#a#b?c?d")
        self.assertEqual(ref.anchor, "a#b")
        self.assertEqual(ref.query_string, "c?d")

    def test_query_containing_escaped_anchor_separator(self):
        ref = parse_document_reference(r"Doc?a\#b")
        self.assertEqual(ref.query_string, "a#b")
        self.assertIsNone(ref.anchor)

    def test_find_unescaped(self):
        self.assertEqual(find_unescaped("ab#c", "#"), 2)
        self.assertEqual(find_unescaped(r"a\#b#", "#"), 4)
        self.assertEqual(find_unescaped(r"a\\#b", "#"), 3)
        self.assertEqual(find_unescaped(r"a\\\#b", "#"), -1)
        self.assertEqual(find_unescaped("a?b#", ("#", "?")), 1)
        self.assertEqual(find_unescaped("a#b#", "#", 2), 3)
        self.assertEqual(find_unescaped("abc\\", "#"), -1)

    def test_parse_is_cached(self):
        first = parse_document_reference("Cached#a")
        self.assertIs(parse_document_reference("Cached#a"), first)

    def test_roundtrip_extra_parts(self):
        for s in map("".join, itertools.product("a#?@\\", repeat=3)):
            ref = document_reference("T#?@", anchor=s, query_string=s[::-1])
            with self.subTest(ref=ref):
                self.assertEqual(
                    parse_document_reference(
                        serialize_document_reference(ref)
                    ),
                    ref,
                )

    def test_roundtrip_targets(self):
        for n in range(4):
            for chars in itertools.product("a#?@", repeat=n):
                target = "".join(chars)
                for ref in (
                    document_reference(target),
                    document_reference(target, anchor="\\"),
                    document_reference(target, query_string="#"),
                ):
                    with self.subTest(ref=ref):
                        self.assertEqual(
                            parse_document_reference(
                                serialize_document_reference(ref)
                            ),
                            ref,
                        )

    def test_concurrent_parsing(self):
        texts = [r"Doc{}#sec\?{}?a=\\{}".format(i, i, i) for i in range(200)]
        with ThreadPoolExecutor(max_workers=8) as executor:
            refs = list(executor.map(parse_document_reference, texts))
        for i, ref in enumerate(refs):
            self.assertEqual(ref.reference, "Doc{}".format(i))
            self.assertEqual(ref.anchor, "sec?{}".format(i))
            self.assertEqual(ref.query_string, "a=\\{}".format(i))
            self.assertEqual(serialize_document_reference(ref), texts[i])
