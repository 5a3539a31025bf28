import copy
import os
import sys
import unittest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from dataset import DependencyDataSet, build_graph
from errors import DanglingReference, DataSetError, SourceUnavailable


def _version(pkg_id, used_by=None, flags=None, size=100, license=None, author=None, extensions=None):
    return {
        "id": pkg_id,
        "usedBy": used_by or {},
        "flags": flags or [],
        "size": size,
        "license": license if license is not None else {"uniqueLicenseIds": ["MIT"]},
        "author": author if author is not None else {},
        "composition": {"extensions": extensions if extensions is not None else [".js"]},
    }


def _manifest():
    return {
        "warnings": ["something odd"],
        "dependencies": {
            "foo": {
                "metadata": {"dependencyCount": 1},
                "vulnerabilities": [],
                "versions": ["1.0.0", "2.0.0"],
                "1.0.0": _version(
                    1,
                    used_by={"bar": "1.0.0"},
                    flags=["hasIndirectDependencies"],
                    size=1500,
                    author={"name": "jane"},
                    extensions=[".js", ".json", ""],
                ),
                "2.0.0": _version(2, size=2000, license="MIT", author={"name": "jane"}),
            },
            "bar": {
                "metadata": {"dependencyCount": 2},
                "vulnerabilities": [],
                "versions": ["1.0.0"],
                "1.0.0": _version(3, size=500, author={}, extensions=[".ts"]),
            },
        },
    }


class TestBuildGraph(unittest.TestCase):
    def test_two_package_scenario(self):
        result = build_graph(_manifest(), {})
        self.assertEqual(len(result.nodes), 3)
        self.assertEqual(result.edges, [{"from": 1, "to": 3}])
        self.assertEqual(result.dependency_count, 2)

    def test_totals(self):
        result = build_graph(_manifest(), {})
        self.assertEqual(result.total_size, 4000)
        self.assertEqual(result.indirect_dependency_count, 1)
        self.assertEqual(result.warnings, ["something odd"])

    def test_counters(self):
        result = build_graph(_manifest(), {})
        self.assertEqual(result.counters.extensions, {".js": 2, ".json": 1, ".ts": 1})
        self.assertEqual(result.counters.licenses, {"Unknown": 1, "MIT": 2})
        self.assertEqual(result.counters.authors, {"jane": {"name": "jane", "count": 2}})

    def test_descriptors_are_stamped(self):
        manifest = _manifest()
        build_graph(manifest, {})
        descriptor = manifest["dependencies"]["foo"]["2.0.0"]
        self.assertEqual(descriptor["name"], "foo")
        self.assertEqual(descriptor["version"], "2.0.0")
        self.assertIs(descriptor["hidden"], False)

    def test_nodes_follow_manifest_order(self):
        result = build_graph(_manifest(), {})
        self.assertEqual([n["id"] for n in result.nodes], [1, 2, 3])
        node = result.nodes[0]
        self.assertEqual(node["label"], "foo@1.0.0 🌲 🎭\n<b>[1.5 kB]</b>")
        self.assertEqual(node["font"], {"multi": "html"})
        self.assertIn("background", node["color"])

    def test_summaries_strip_whitespace(self):
        result = build_graph(_manifest(), {})
        first = result.summaries[0]
        self.assertEqual((first.id, first.name, first.version), (1, "foo", "1.0.0"))
        self.assertEqual(first.flags, "🌲🎭")
        self.assertEqual(result.summaries[1].flags, "🎭")
        self.assertEqual(result.summaries[2].flags, "")

    def test_linker_matches_nodes(self):
        result = build_graph(_manifest(), {})
        node_ids = sorted(n["id"] for n in result.nodes)
        self.assertEqual(sorted(result.linker.keys()), node_ids)
        for edge in result.edges:
            self.assertIn(edge["from"], result.linker)
            self.assertIn(edge["to"], result.linker)

    def test_ids_are_unique(self):
        result = build_graph(_manifest(), {})
        ids = [n["id"] for n in result.nodes]
        self.assertEqual(len(ids), len(set(ids)))

    def test_edge_count_matches_used_by(self):
        manifest = _manifest()
        manifest["dependencies"]["bar"]["1.0.0"]["usedBy"] = {"foo": "2.0.0"}
        expected = sum(
            len(entry[v]["usedBy"])
            for entry in manifest["dependencies"].values()
            for v in entry["versions"]
        )
        result = build_graph(manifest, {})
        self.assertEqual(len(result.edges), expected)

    def test_cycles_are_allowed(self):
        manifest = _manifest()
        manifest["dependencies"]["bar"]["1.0.0"]["usedBy"] = {"foo": "1.0.0"}
        result = build_graph(manifest, {})
        self.assertEqual(result.edges, [{"from": 1, "to": 3}, {"from": 3, "to": 1}])

    def test_dangling_package(self):
        manifest = _manifest()
        manifest["dependencies"]["bar"]["1.0.0"]["usedBy"] = {"ghost": "1.0.0"}
        with self.assertRaises(DanglingReference) as ctx:
            build_graph(manifest, {})
        self.assertEqual(ctx.exception.target_name, "ghost")
        self.assertIsInstance(ctx.exception.__cause__, KeyError)

    def test_dangling_version(self):
        manifest = _manifest()
        manifest["dependencies"]["foo"]["1.0.0"]["usedBy"] = {"bar": "9.9.9"}
        with self.assertRaises(DanglingReference):
            build_graph(manifest, {})

    def test_dangling_non_descriptor_key(self):
        manifest = _manifest()
        manifest["dependencies"]["foo"]["1.0.0"]["usedBy"] = {"bar": "versions"}
        with self.assertRaises(DanglingReference) as ctx:
            build_graph(manifest, {})
        self.assertIsInstance(ctx.exception.__cause__, TypeError)

    def test_node_colors_are_not_shared(self):
        first = build_graph(_manifest(), {})
        expected = first.nodes[1]["color"]["highlight"]["background"]
        first.nodes[0]["color"]["highlight"]["background"] = "#000000"
        self.assertEqual(first.nodes[1]["color"]["highlight"]["background"], expected)
        second = build_graph(_manifest(), {})
        self.assertEqual(second.nodes[0]["color"]["highlight"]["background"], expected)

    def test_flags_document_changes_label(self):
        flags_doc = {"hasIndirectDependencies": {"emoji": "I"}}
        result = build_graph(_manifest(), flags_doc)
        self.assertEqual(result.nodes[0]["label"], "foo@1.0.0 I 🎭\n<b>[1.5 kB]</b>")


class TestDependencyDataSet(unittest.TestCase):
    def test_public_surface(self):
        ds = DependencyDataSet().init(_manifest(), {"x": 1})
        self.assertEqual(ds.dependencies_count, 2)
        self.assertEqual(ds.size, 4000)
        self.assertEqual(ds.indirect_dependencies, 1)
        self.assertEqual(ds.licenses["Unknown"], 1)
        self.assertEqual(ds.authors["jane"]["count"], 2)
        self.assertEqual(ds.extensions[".ts"], 1)
        self.assertEqual(ds.flags, {"x": 1})
        self.assertEqual(len(ds.packages), 3)
        self.assertEqual(len(ds.linker), 3)

    def test_ready_callback_fires_once_with_payload(self):
        calls = []
        manifest = _manifest()
        ds = DependencyDataSet(on_ready=calls.append)
        ds.init(manifest, {})
        self.assertEqual(len(calls), 1)
        self.assertIs(calls[0], manifest)

    def test_source_is_used_without_payload(self):
        class FakeSource:
            def __init__(self):
                self.calls = 0

            def fetch(self):
                self.calls += 1
                return _manifest(), {"flag": {}}

        source = FakeSource()
        ds = DependencyDataSet(source=source).init()
        self.assertEqual(source.calls, 1)
        self.assertEqual(len(ds.raw_nodes), 3)

    def test_without_payload_or_source(self):
        with self.assertRaises(RuntimeError):
            DependencyDataSet().init()

    def test_unavailable_source_keeps_previous_state(self):
        class FailingSource:
            def fetch(self):
                raise SourceUnavailable("flags", "http://host/flags", "503")

        calls = []
        manifest = _manifest()
        ds = DependencyDataSet(on_ready=calls.append).init(manifest, {})
        ds.source = FailingSource()
        with self.assertRaises(SourceUnavailable):
            ds.init()
        self.assertIs(ds.payload, manifest)
        self.assertEqual(len(ds.raw_nodes), 3)
        self.assertEqual(ds.size, 4000)
        self.assertEqual(len(calls), 1)

    def test_failed_build_keeps_previous_state(self):
        calls = []
        ds = DependencyDataSet(on_ready=calls.append).init(_manifest(), {})
        broken = _manifest()
        broken["dependencies"]["bar"]["1.0.0"]["usedBy"] = {"ghost": "1.0.0"}
        with self.assertRaises(DataSetError):
            ds.init(broken, {})
        self.assertEqual(len(ds.raw_nodes), 3)
        self.assertEqual(len(calls), 1)

    def test_reinit_replaces_state(self):
        ds = DependencyDataSet().init(_manifest(), {})
        ds.init(_manifest(), {})
        self.assertEqual(ds.size, 4000)
        self.assertEqual(len(ds.raw_nodes), 3)
        self.assertEqual(ds.licenses, {"Unknown": 1, "MIT": 2})

    def test_build_is_repeatable(self):
        ds = DependencyDataSet().init(_manifest(), {})
        raw_before = copy.deepcopy(ds.raw_nodes)
        first = ds.build()
        second = ds.build()
        self.assertEqual(first["nodes"], second["nodes"])
        self.assertEqual(first["edges"], second["edges"])
        self.assertIsNot(first["edges"], second["edges"])
        self.assertEqual(ds.raw_nodes, raw_before)

    def test_hidden_toggle_through_linker(self):
        manifest = _manifest()
        ds = DependencyDataSet().init(manifest, {})
        ds.linker.set_hidden(3)
        self.assertTrue(manifest["dependencies"]["bar"]["1.0.0"]["hidden"])

    def test_statistics_snapshot(self):
        ds = DependencyDataSet().init(_manifest(), {})
        stats = ds.statistics()
        self.assertEqual(stats.dependencies_count, 2)
        self.assertEqual(stats.size, 4000)
        self.assertEqual(stats.warnings, ["something odd"])
        stats.licenses["MIT"] = 0
        self.assertEqual(ds.licenses["MIT"], 2)


if __name__ == "__main__":
    unittest.main()
