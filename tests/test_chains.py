"""Tests for logchain/chains.py"""

import unittest

from logchain.chains import build_chains, build_predecessor_index, find_endpoints, walk_back
from logchain.models import EncodingType, Record


def _rec(rec_id: str, next_id: str, pipeline_id: str = "1") -> Record:
    body = f"msg {rec_id}"
    return Record(
        pipeline_id=pipeline_id,
        id=rec_id,
        encoding=EncodingType.ASCII,
        raw_body=body,
        decoded_body=body,
        next_id=next_id,
    )


def _ids(chain):
    return [r.id for r in chain]


class TestPredecessorIndex(unittest.TestCase):
    def test_keyed_by_target(self):
        a, b = _rec("A", "B"), _rec("B", "-1")
        index = build_predecessor_index([a, b])
        self.assertEqual(index, {"B": a})

    def test_terminal_records_not_indexed(self):
        self.assertEqual(build_predecessor_index([_rec("A", "-1")]), {})

    def test_first_pointer_wins(self):
        first, second = _rec("A", "C"), _rec("B", "C")
        index = build_predecessor_index([first, second, _rec("C", "-1")])
        self.assertIs(index["C"], first)


class TestFindEndpoints(unittest.TestCase):
    def test_terminal_before_dangling(self):
        records = [_rec("A", "Z"), _rec("B", "-1")]
        endpoints = find_endpoints(records, build_predecessor_index(records))
        self.assertEqual(_ids(endpoints), ["B", "A"])

    def test_each_class_descending_by_id(self):
        records = [
            _rec("E", "-1"), _rec("K", "-1"), _rec("G", "-1"),
            _rec("B", "C"), _rec("H", "I"),
        ]
        endpoints = find_endpoints(records, build_predecessor_index(records))
        self.assertEqual(_ids(endpoints), ["K", "G", "E", "H", "B"])

    def test_ids_compared_as_strings(self):
        records = [_rec("9", "-1"), _rec("10", "-1"), _rec("legacy", "-1")]
        endpoints = find_endpoints(records, build_predecessor_index(records))
        self.assertEqual(_ids(endpoints), ["legacy", "9", "10"])

    def test_cycle_has_no_endpoints(self):
        records = [_rec("1", "2"), _rec("2", "3"), _rec("3", "1")]
        self.assertEqual(find_endpoints(records, build_predecessor_index(records)), [])


class TestWalkBack(unittest.TestCase):
    def test_walks_to_chain_start(self):
        records = [_rec("1", "2"), _rec("0", "1"), _rec("2", "-1")]
        index = build_predecessor_index(records)
        self.assertEqual(_ids(walk_back(records[2], index)), ["2", "1", "0"])

    def test_single_record_chain(self):
        lone = _rec("X", "-1")
        self.assertEqual(walk_back(lone, {}), [lone])


class TestBuildChains(unittest.TestCase):
    def test_simple_chain_last_to_first(self):
        records = [_rec("1", "2"), _rec("0", "1"), _rec("2", "-1")]
        chains = build_chains(records)
        self.assertEqual([_ids(c) for c in chains], [["2", "1", "0"]])

    def test_missing_last_message_uses_dangling_endpoint(self):
        records = [_rec("3", "4"), _rec("1", "2"), _rec("2", "3")]
        chains = build_chains(records)
        self.assertEqual([_ids(c) for c in chains], [["3", "2", "1"]])

    def test_missing_middle_message_splits_chain(self):
        records = [_rec("C", "D"), _rec("D", "E"), _rec("F", "G"), _rec("G", "-1")]
        chains = build_chains(records)
        self.assertEqual([_ids(c) for c in chains], [["G", "F"], ["D", "C"]])

    def test_multiple_chains_with_gaps(self):
        records = [
            _rec("A", "B"), _rec("B", "C"),
            _rec("D", "E"), _rec("E", "-1"),
            _rec("F", "G"), _rec("G", "-1"),
            _rec("H", "I"),
            _rec("J", "K"), _rec("K", "-1"),
        ]
        chains = build_chains(records)
        self.assertEqual(
            [_ids(c) for c in chains],
            [["K", "J"], ["G", "F"], ["E", "D"], ["H"], ["B", "A"]],
        )

    def test_successor_pointers_link_consecutive_positions(self):
        records = [_rec("0", "1"), _rec("1", "2"), _rec("2", "3"), _rec("3", "-1")]
        (chain,) = build_chains(records)
        for k in range(1, len(chain)):
            self.assertEqual(chain[k].next_id, chain[k - 1].id)

    def test_cycle_returns_empty_and_logs_error(self):
        records = [_rec("1", "2"), _rec("2", "3"), _rec("3", "1")]
        with self.assertLogs("logchain.chains", level="ERROR") as cm:
            self.assertEqual(build_chains(records, pipeline_id="7"), [])
        self.assertIn("7", cm.output[0])

    def test_empty_group_returns_empty(self):
        with self.assertLogs("logchain.chains", level="ERROR"):
            self.assertEqual(build_chains([], pipeline_id="empty"), [])

    def test_duplicate_next_id_orphans_later_record(self):
        records = [_rec("A", "C"), _rec("B", "C"), _rec("C", "-1")]
        chains = build_chains(records)
        self.assertEqual([_ids(c) for c in chains], [["C", "A"]])

    def test_orphan_sharing_dangling_target_is_dropped(self):
        # B shares next_id "Z" with A; only A is indexed, so B is unreachable
        records = [_rec("A", "Z"), _rec("B", "Z"), _rec("Y", "-1")]
        chains = build_chains(records)
        self.assertEqual([_ids(c) for c in chains], [["Y"], ["A"]])

    def test_cycle_hanging_off_valid_chain_is_unreachable(self):
        records = [_rec("0", "1"), _rec("1", "-1"), _rec("x", "y"), _rec("y", "x")]
        chains = build_chains(records)
        self.assertEqual([_ids(c) for c in chains], [["1", "0"]])


if __name__ == "__main__":
    unittest.main()
