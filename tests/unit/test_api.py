"""
Unit tests for the standard binding facade.

Tests cover:
1. Conversion of byte-ish inputs
2. Module-level helpers with the default node hash
3. StandardMerkleTree positions, proofs and verification
"""

import pytest

from flatmerkle.api import (
    StandardMerkleTree,
    to_hash,
    make_merkle_tree,
    get_proof,
    process_proof,
    get_multiproof,
    process_multiproof,
    is_valid_merkle_tree,
    render_merkle_tree,
)
from flatmerkle.core.errors import EmptyTreeError, InvalidLeafLengthError, NotALeafIndexError
from flatmerkle.core.tree import MultiProof
from flatmerkle.crypto import sha256, sha256_node_hash


ZERO_LIST = [0] * 32


@pytest.fixture
def leaves():
    return [sha256(f"item-{i}".encode()) for i in range(6)]


class TestToHash:
    
    def test_bytes_pass_through(self):
        value = bytes(32)
        assert to_hash(value) is value
    
    def test_list_of_ints(self):
        assert to_hash(ZERO_LIST) == bytes(32)
    
    def test_hex_string(self):
        assert to_hash("0x" + "ff" * 2) == b"\xff\xff"
    
    def test_memoryview(self):
        assert to_hash(memoryview(b"ab")) == b"ab"
    
    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            to_hash(42)
    
    def test_int_out_of_byte_range(self):
        with pytest.raises(ValueError):
            to_hash([256])


class TestModuleHelpers:
    
    def test_default_is_sha256(self, leaves):
        assert make_merkle_tree(leaves)[0] == make_merkle_tree(leaves, "sha256")[0]
        assert make_merkle_tree(leaves)[0] != make_merkle_tree(leaves, "keccak256")[0]
    
    def test_list_of_int_leaves(self):
        tree = make_merkle_tree([ZERO_LIST, ZERO_LIST])
        assert tree[0] == sha256_node_hash(bytes(32), bytes(32))
    
    def test_zero_leaves(self):
        with pytest.raises(EmptyTreeError, match="Expected non-zero number of leaves"):
            make_merkle_tree([])
    
    def test_invalid_leaf_format(self):
        with pytest.raises(InvalidLeafLengthError):
            make_merkle_tree([[0]])
    
    def test_proof_round_trip_with_hex(self, leaves):
        tree = [node.hex() for node in make_merkle_tree(leaves)]
        proof = get_proof(tree, len(tree) - 1)
        assert process_proof(leaves[0], proof) == bytes.fromhex(tree[0])
    
    def test_proof_for_internal_node(self):
        tree = make_merkle_tree([ZERO_LIST, ZERO_LIST])
        with pytest.raises(NotALeafIndexError, match="Expected leaf node"):
            get_proof(tree, 0)
    
    def test_multiproof_round_trip(self, leaves):
        tree = make_merkle_tree(leaves, "keccak256")
        mp = get_multiproof(tree, [len(tree) - 1, len(tree) - 4])
        assert process_multiproof(mp, "keccak256") == tree[0]
    
    def test_multiproof_accepts_list_hashes(self):
        mp = MultiProof(leaves=[ZERO_LIST], proof=[], proof_flags=[])
        assert process_multiproof(mp) == bytes(32)
    
    def test_validity(self, leaves):
        assert is_valid_merkle_tree(make_merkle_tree(leaves))
        assert not is_valid_merkle_tree([])
        assert not is_valid_merkle_tree([[0]])
        assert not is_valid_merkle_tree([ZERO_LIST, ZERO_LIST])
        assert not is_valid_merkle_tree([ZERO_LIST, ZERO_LIST, ZERO_LIST])
        assert not is_valid_merkle_tree(["not hex"])
    
    def test_render(self):
        output = render_merkle_tree(make_merkle_tree([ZERO_LIST, ZERO_LIST]))
        assert isinstance(output, str)
        assert len(output) > 0


class TestStandardMerkleTree:
    
    def test_of_matches_build(self, leaves):
        tree = StandardMerkleTree.of(leaves)
        assert tree.tree == make_merkle_tree(leaves)
        assert tree.root == tree.tree[0]
    
    def test_len_is_leaf_count(self, leaves):
        assert len(StandardMerkleTree.of(leaves)) == 6
    
    def test_leaf_positions(self, leaves):
        tree = StandardMerkleTree.of(leaves)
        
        assert tree.leaf_tree_index(0) == 10
        assert tree.leaf_tree_index(5) == 5
        assert [tree.get_leaf(i) for i in range(6)] == leaves
    
    def test_leaf_position_out_of_range(self, leaves):
        tree = StandardMerkleTree.of(leaves)
        with pytest.raises(IndexError):
            tree.get_proof(6)
    
    def test_every_leaf_verifies(self, leaves):
        tree = StandardMerkleTree.of(leaves)
        for i, leaf in enumerate(leaves):
            assert tree.verify(leaf, tree.get_proof(i))
    
    def test_verify_rejects_wrong_leaf(self, leaves):
        tree = StandardMerkleTree.of(leaves)
        assert not tree.verify(leaves[1], tree.get_proof(0))
    
    def test_verify_rejects_malformed_input(self, leaves):
        tree = StandardMerkleTree.of(leaves)
        assert not tree.verify(b"short", tree.get_proof(0))
        assert not tree.verify(leaves[0], [b"short"])
    
    def test_multiproof_by_input_position(self, leaves):
        tree = StandardMerkleTree.of(leaves)
        mp = tree.get_multiproof([0, 2, 5])
        
        assert sorted(mp.leaves) == sorted([leaves[0], leaves[2], leaves[5]])
        assert tree.verify_multiproof(mp)
    
    def test_verify_multiproof_rejects_invalid(self, leaves):
        tree = StandardMerkleTree.of(leaves)
        assert not tree.verify_multiproof(MultiProof([bytes(32)] * 2, [], [True, True]))
    
    def test_validate_and_render(self, leaves):
        tree = StandardMerkleTree.of(leaves, "keccak256")
        
        assert tree.validate()
        assert tree.render().count("\n") == len(tree.tree) - 1
    
    def test_contains(self, leaves):
        tree = StandardMerkleTree.of(leaves)
        
        assert leaves[3] in tree
        assert tree.root not in tree
        assert 42 not in tree
    
    def test_document_round_trip(self, leaves):
        tree = StandardMerkleTree.of(leaves, "keccak256")
        restored = StandardMerkleTree.from_document(tree.to_document())
        
        assert restored.tree == tree.tree
        assert restored.hash_algorithm == "keccak256"
        assert restored.validate()
    
    def test_keccak_root_differs(self, leaves):
        sha_tree = StandardMerkleTree.of(leaves)
        keccak_tree = StandardMerkleTree.of(leaves, "keccak256")
        
        assert keccak_tree.root == make_merkle_tree(leaves, "keccak256")[0]
        assert keccak_tree.root != sha_tree.root
        assert keccak_tree.validate()
        assert not StandardMerkleTree(keccak_tree.tree, "sha256").validate()
