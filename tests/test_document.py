"""
IniDocument - ordered sections plus the untitled header section.
"""

import copy

import pytest

from keepini.ini import AccessValueError, IniDocument, IniSection


@pytest.fixture
def doc():
    d = IniDocument()
    d.header.set("root", "r")
    d.setdefault("Sec1").set("key1", "value1")
    d.setdefault("Sec2").set("key2", "value2")
    d.setdefault("Sec3")
    return d


class TestSections:

    def test_new_document_is_empty(self):
        d = IniDocument()
        assert len(d) == 0
        assert isinstance(d.header, IniSection)
        assert len(d.header) == 0

    def test_setdefault_creates_at_end(self, doc):
        s = doc.setdefault("New")
        assert list(doc) == ["Sec1", "Sec2", "Sec3", "New"]
        assert doc.setdefault("New") is s

    def test_setdefault_existing_returns_same(self, doc):
        assert doc.setdefault("Sec1") is doc["Sec1"]
        assert doc["Sec1"]["key1"] == "value1"

    def test_get_missing(self, doc):
        assert doc.get("nope") is None
        assert "nope" not in doc
        with pytest.raises(KeyError):
            doc["nope"]

    def test_header_not_iterated(self, doc):
        assert "root" not in [k for _, s in doc.items() for k in s]
        assert [name for name, _ in doc.items()] == ["Sec1", "Sec2", "Sec3"]

    def test_setitem_copies(self):
        d = IniDocument()
        s = IniSection({"a": "1"})
        d["S"] = s
        s.set("a", "2")
        assert d["S"]["a"] == "1"
        d["M"] = {"x": "y"}
        assert isinstance(d["M"], IniSection)
        assert d["M"]["x"] == "y"

    def test_none_rejected(self, doc):
        with pytest.raises(TypeError):
            doc.setdefault(None)
        with pytest.raises(TypeError):
            doc[None] = IniSection()
        with pytest.raises(TypeError):
            doc.rename("Sec1", None)

    def test_remove(self, doc):
        assert doc.remove("Sec2") is True
        assert list(doc) == ["Sec1", "Sec3"]
        assert doc.remove("Sec2") is False

    def test_rename_keeps_position(self, doc):
        section = doc["Sec2"]
        assert doc.rename("Sec2", "Middle") is True
        assert list(doc) == ["Sec1", "Middle", "Sec3"]
        assert doc["Middle"] is section

    def test_rename_noop_cases(self, doc):
        assert doc.rename("nope", "x") is False
        assert doc.rename("Sec1", "Sec1") is False
        with pytest.warns(UserWarning):
            assert doc.rename("Sec1", "Sec2") is False
        assert doc["Sec1"]["key1"] == "value1"
        assert doc["Sec2"]["key2"] == "value2"

    def test_clear_all(self, doc):
        sec1 = doc["Sec1"]
        doc.clear()
        assert len(doc) == 0
        assert len(doc.header) == 0
        assert len(sec1) == 0

    def test_clear_keeps_header(self, doc):
        doc.clear(including_header=False)
        assert len(doc) == 0
        assert doc.header["root"] == "r"


class TestValues:

    def test_getvalue(self, doc):
        assert doc.getvalue("Sec1", "key1") == "value1"
        assert doc.getvalue("Sec1", "nope", "def") == "def"
        assert doc.getvalue("Nope", "key1", "def") == "def"
        assert doc.getvalue("Nope", "key1") is None
        # lookup never creates sections
        assert "Nope" not in doc

    def test_getvalue_none_key(self, doc):
        with pytest.raises(TypeError):
            doc.getvalue("Sec1", None)

    def test_setvalue_creates(self, doc):
        doc.setvalue("Fresh", "k", 3)
        assert doc["Fresh"]["k"] == "3"
        assert list(doc)[-1] == "Fresh"

    def test_hasvalue(self, doc):
        assert doc.hasvalue("Sec1", "key1")
        assert not doc.hasvalue("Sec1", "nope")
        assert not doc.hasvalue("Nope", "key1")

    def test_typed(self, doc):
        doc.setvalue("Num", "n", "7")
        doc.setvalue("Num", "flag", "True")
        assert doc.getint("Num", "n") == 7
        assert doc.getbool("Num", "flag") is True
        with pytest.raises(AccessValueError):
            doc.getint("Nope", "n")
        with pytest.raises(AccessValueError):
            doc.getbool("Nope", "flag")


class TestEqualityAndClone:

    def test_equal_ignores_section_order(self):
        a, b = IniDocument(), IniDocument()
        a.setvalue("A", "k", "1")
        a.setvalue("B", "k", "2")
        b.setvalue("B", "k", "2")
        b.setvalue("A", "k", "1")
        assert a == b
        assert list(a) != list(b)

    def test_header_matters(self):
        a, b = IniDocument(), IniDocument()
        a.header.set("k", "v")
        assert a != b

    def test_clone_independent(self, doc):
        clone = doc.deepclone()
        assert clone == doc
        clone["Sec1"].set("key1", "changed")
        clone.header.set("root", "changed")
        clone.remove("Sec3")
        assert doc["Sec1"]["key1"] == "value1"
        assert doc.header["root"] == "r"
        assert "Sec3" in doc
        assert clone != doc

    def test_copy_module_uses_clone(self, doc):
        clone = copy.deepcopy(doc)
        assert clone == doc
        assert clone["Sec1"] is not doc["Sec1"]

    def test_not_equal_to_dict(self, doc):
        assert doc != {}
