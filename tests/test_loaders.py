"""Testy wczytywania ontologii i pliku związków."""

import pytest

from assignment.loader import parse_items, read_items
from ontology import ConfigurationError, OntologyFormatError, parse_ontology, read_ontology

OBO = """\
format-version: 1.2

[Term]
id: OC:1
name: compound

[Term]
id: OC:2
name: acid ! komentarz
is_a: OC:1 ! compound
cdk_smarts: C(=O)[OH]
oc_smarts: [CX3](=O)[OX2H1]

[Term]
id: OC:3
name: not an amine
is_a: OC:2
cdk_smarts: \\!N ! wzorzec NOT
cdk_smarts: a\\\\b

[Term]
id: OC:4
name: obsolete
is_a: OC:1
cdk_smarts: C
is_obsolete: true

[Term]
id: OC:5
name: empty leaf
is_a: OC:2

[Typedef]
id: has_a
"""


class TestOntologyLoader:

    def test_concepts(self):
        data = parse_ontology(OBO.splitlines())
        assert list(data.concepts) == ["OC:1", "OC:2", "OC:3"]
        acid = data.concepts["OC:2"]
        assert acid.name == "acid"
        assert acid.parent_ids == {"OC:1"}
        assert acid.expressions == ("C(=O)[OH]",)

    def test_unescape_and_comment(self):
        data = parse_ontology(OBO.splitlines())
        assert data.concepts["OC:3"].expressions == ("!N", "a\\b")

    def test_smarts_tag_selection(self):
        data = parse_ontology(OBO.splitlines(), smarts_tag="oc_smarts")
        assert data.concepts["OC:2"].expressions == ("[CX3](=O)[OX2H1]",)
        # OC:3 nie ma wzorców oc_smarts i jest liściem → pominięty
        assert "OC:3" not in data.concepts

    def test_obsolete_and_empty_leaf_dropped(self):
        data = parse_ontology(OBO.splitlines())
        assert "OC:4" not in data.concepts
        assert "OC:5" not in data.concepts

    def test_has_a_children(self):
        data = parse_ontology(["[Term]", "id: R", "has_a: A", "", "[Term]", "id: A", "is_a: R", "cdk_smarts: C"])
        assert data.concepts["R"].child_ids == {"A"}

    def test_new_stanza_without_blank_line(self):
        lines = ["[Term]", "id: A", "[Term]", "id: B"]
        with pytest.raises(OntologyFormatError, match=":3:"):
            parse_ontology(lines, source="klasy.obo")

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "brak.obo"
        with pytest.raises(ConfigurationError, match="brak.obo"):
            read_ontology(missing)

    def test_read_file(self, tmp_path):
        path = tmp_path / "klasy.obo"
        path.write_text(OBO, encoding="utf-8")
        assert len(read_ontology(path)) == 3


class TestItemLoader:

    def test_parse(self):
        lines = [
            "# SMILES\tID\n",
            "CCO\tC1\n",
            "\n",
            "broken-line\n",
            "c1ccccc1\tC2\textra\n",
            "CC\tC1\n",
        ]
        items = parse_items(lines)
        assert list(items) == ["C1", "C2"]
        assert items["C1"].structure == "CC"
        assert items["C2"].structure == "c1ccccc1"

    def test_limit(self):
        lines = [f"C\tid{i}" for i in range(10)]
        assert len(parse_items(lines, limit=3)) == 3
        assert parse_items(lines, limit=0) == {}

    def test_custom_delimiter(self):
        items = parse_items(["CCO,C1"], delimiter=",")
        assert items["C1"].structure == "CCO"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="zwiazki.tsv"):
            read_items(tmp_path / "zwiazki.tsv")
