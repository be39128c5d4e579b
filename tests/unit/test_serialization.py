"""
Unit tests for JSON documents.

Tests cover:
1. Tree / proof / multiproof conversion
2. Hex normalization
3. Rejection of malformed documents
"""

import json

import pytest
from pydantic import ValidationError

from flatmerkle.core.serialization import (
    TreeDocument,
    ProofDocument,
    MultiProofDocument,
    tree_to_document,
    proof_to_document,
    multiproof_to_document,
    multiproof_from_document,
    dump_document,
    load_document,
)
from flatmerkle.core.tree import build_tree, get_multiproof, get_proof, process_multiproof
from flatmerkle.crypto import sha256, sha256_node_hash


@pytest.fixture
def tree():
    return build_tree([sha256(bytes([i])) for i in range(5)], sha256_node_hash)


class TestTreeDocument:
    
    def test_round_trip(self, tree):
        document = tree_to_document(tree)
        restored = load_document("tree", dump_document(document))
        
        assert restored.to_tree() == tree
        assert restored.hash_algorithm == "sha256"
    
    def test_hex_is_prefixed_and_lowercase(self):
        node = "AB" * 32
        document = TreeDocument(nodes=[node])
        assert document.nodes == ["0x" + "ab" * 32]
    
    def test_rejects_short_node(self):
        with pytest.raises(ValidationError):
            TreeDocument(nodes=["0x00"])
    
    def test_rejects_empty_tree(self):
        with pytest.raises(ValidationError):
            TreeDocument(nodes=[])
    
    def test_rejects_unknown_algorithm(self):
        with pytest.raises(ValidationError):
            TreeDocument(hash_algorithm="md5", nodes=["00" * 32])
    
    def test_rejects_extra_fields(self):
        text = json.dumps({"nodes": ["00" * 32], "depth": 1})
        with pytest.raises(ValidationError):
            load_document("tree", text)


class TestProofDocument:
    
    def test_round_trip(self, tree):
        proof = get_proof(tree, 8)
        document = proof_to_document(tree[8], proof, tree[0])
        restored = load_document("proof", dump_document(document))
        
        assert restored.proof_bytes() == proof
        assert restored.root == "0x" + tree[0].hex()
    
    def test_root_optional(self, tree):
        document = proof_to_document(tree[8], [])
        assert "root" not in json.loads(dump_document(document))
    
    def test_rejects_bad_proof_entry(self):
        with pytest.raises(ValidationError):
            ProofDocument(leaf="00" * 32, proof=["zz" * 32])
    
    def test_hash_algorithm_carried(self, tree):
        document = proof_to_document(tree[8], [], hash_algorithm="keccak256")
        restored = load_document("proof", dump_document(document))
        
        assert restored.hash_algorithm == "keccak256"
    
    def test_hash_algorithm_defaults_to_sha256(self):
        assert ProofDocument(leaf="00" * 32).hash_algorithm == "sha256"
    
    def test_rejects_unknown_hash_algorithm(self):
        with pytest.raises(ValidationError):
            ProofDocument(hash_algorithm="md5", leaf="00" * 32)


class TestMultiProofDocument:
    
    def test_round_trip(self, tree):
        mp = get_multiproof(tree, [4, 6, 8])
        document = multiproof_to_document(mp, tree[0])
        restored = multiproof_from_document(load_document("multiproof", dump_document(document)))
        
        assert restored == mp
        assert process_multiproof(restored, sha256_node_hash) == tree[0]
    
    def test_hash_algorithm_normalized(self):
        document = MultiProofDocument(hash_algorithm="KECCAK256", proof=["00" * 32])
        assert document.hash_algorithm == "keccak256"
    
    def test_rejects_unknown_hash_algorithm(self):
        with pytest.raises(ValidationError):
            MultiProofDocument(hash_algorithm="blake2", proof=["00" * 32])
    
    def test_flags_preserved(self):
        document = MultiProofDocument(leaves=["00" * 32], proof=["11" * 32], proof_flags=[False])
        assert multiproof_from_document(document).proof_flags == [False]
    
    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown document kind"):
            load_document("forest", "{}")
