"""Testy wyroczni RDKit (pomijane, gdy rdkit nie jest zainstalowany)."""

import pytest

pytest.importorskip("rdkit")

from assignment import ORACLE_FAILURE, create_oracle, evaluate_concept  # noqa: E402
from assignment.rdkit_oracle import RDKitOracle  # noqa: E402

HYDROXYL = "[OX2H]"


@pytest.fixture(scope="module")
def rdkit_oracle() -> RDKitOracle:
    return RDKitOracle()


class TestRDKitOracle:

    def test_factory(self):
        assert isinstance(create_oracle("RDKit"), RDKitOracle)

    def test_match(self, rdkit_oracle):
        assert rdkit_oracle.match("OCCO", HYDROXYL) == 1
        assert rdkit_oracle.match("CCC", HYDROXYL) == 0

    def test_count(self, rdkit_oracle):
        assert rdkit_oracle.count("OCCO", HYDROXYL) == 2
        assert rdkit_oracle.count("CCO", HYDROXYL) == 1

    def test_invalid_smiles(self, rdkit_oracle):
        assert rdkit_oracle.match("not_a_smiles((", HYDROXYL) == ORACLE_FAILURE
        assert rdkit_oracle.count("not_a_smiles((", HYDROXYL) == ORACLE_FAILURE

    def test_invalid_smarts(self, rdkit_oracle):
        assert rdkit_oracle.match("OCCO", "[OX2") == ORACLE_FAILURE

    def test_stereo(self, rdkit_oracle):
        l_ala = "C[C@H](N)C(=O)O"
        d_ala = "C[C@@H](N)C(=O)O"
        assert rdkit_oracle.match(l_ala, d_ala) == 1
        assert rdkit_oracle.match_stereo(l_ala, l_ala) == 1
        assert rdkit_oracle.match_stereo(l_ala, d_ala) == 0


class TestExpressionsOnRDKit:

    def test_exact(self, rdkit_oracle):
        assert evaluate_concept("OCCO", ["2EXACT[OX2H]"], rdkit_oracle)
        assert not evaluate_concept("OCCO", ["3EXACT[OX2H]"], rdkit_oracle)

    def test_more(self, rdkit_oracle):
        assert evaluate_concept("OCCO", ["1MORE[OX2H]"], rdkit_oracle)
        assert not evaluate_concept("CCO", ["2MORE[OX2H]"], rdkit_oracle)

    def test_not_only(self, rdkit_oracle):
        assert evaluate_concept("OCCO", ["!c1ccccc1"], rdkit_oracle)
        assert not evaluate_concept("Oc1ccccc1", ["!c1ccccc1"], rdkit_oracle)

    def test_invalid_structure_is_no_match(self, rdkit_oracle):
        assert not evaluate_concept("not_a_smiles((", [HYDROXYL], rdkit_oracle)
