"""
Tests for the extraction pipeline: table extractor, section classifier,
row mapper and the page-level orchestrator.
"""

import unittest
from bs4 import BeautifulSoup

from antdv_docs.extraction.extractor import ApiExtractor
from antdv_docs.extraction.row_mapper import RowMapper
from antdv_docs.extraction.section_classifier import SectionClassifier
from antdv_docs.extraction.table_extractor import TableExtractor
from antdv_docs.extraction.data_models import TableData
from sample_pages import BUTTON_PAGE, BUTTON_URL


def first_table(html: str):
    return BeautifulSoup(html, "html.parser").find("table")


def map_rows(headers, rows, kind="props"):
    return RowMapper.to_api_items(
        TableData(headers=headers, rows=rows),
        kind=kind,
        version="v4",
        component_tag="a-button",
        source_url=BUTTON_URL
    )


class TestTableExtractor(unittest.TestCase):
    def test_thead_headers(self):
        table = first_table("""
            <table>
              <thead><tr><th>参数</th><th>说明</th></tr></thead>
              <tbody><tr><td> size </td><td>按钮
                大小</td></tr></tbody>
            </table>""")
        data = TableExtractor.parse_table(table)
        self.assertEqual(data.headers, ["参数", "说明"])
        self.assertEqual(data.rows, [["size", "按钮\n                大小"]])

    def test_first_row_used_as_header_without_thead(self):
        table = first_table("""
            <table>
              <tr><td>Property</td><td>Type</td></tr>
              <tr><td>size</td><td>string</td></tr>
            </table>""")
        data = TableExtractor.parse_table(table)
        self.assertEqual(data.headers, ["Property", "Type"])
        self.assertEqual(data.rows, [["size", "string"]])

    def test_header_only_rows_in_body_are_skipped(self):
        table = first_table("""
            <table>
              <thead><tr><th>Property</th><th>Type</th></tr></thead>
              <tbody>
                <tr><th>Group</th><th>Extra</th></tr>
                <tr><td>size</td><td>string</td></tr>
              </tbody>
            </table>""")
        data = TableExtractor.parse_table(table)
        self.assertEqual(data.rows, [["size", "string"]])

    def test_mixed_header_and_data_cells_kept_as_data(self):
        table = first_table("""
            <table>
              <thead><tr><th>Property</th><th>Description</th></tr></thead>
              <tbody><tr><th>size</th><td>desc</td></tr></tbody>
            </table>""")
        data = TableExtractor.parse_table(table)
        self.assertEqual(data.rows, [["size", "desc"]])
        items = RowMapper.to_api_items(data, "props", "v4", "a-button", BUTTON_URL)
        self.assertEqual((items[0].name, items[0].description), ("size", "desc"))

    def test_ragged_rows_kept(self):
        table = first_table("""
            <table>
              <thead><tr><th>Property</th><th>Type</th><th>Default</th></tr></thead>
              <tbody>
                <tr><td>size</td></tr>
                <tr><td>a</td><td>b</td><td>c</td><td>d</td></tr>
              </tbody>
            </table>""")
        data = TableExtractor.parse_table(table)
        self.assertEqual(data.rows, [["size"], ["a", "b", "c", "d"]])

    def test_empty_table(self):
        data = TableExtractor.parse_table(first_table("<table></table>"))
        self.assertEqual(data.headers, [])
        self.assertEqual(data.rows, [])


class TestSectionClassifier(unittest.TestCase):
    def test_classify_heading(self):
        self.assertEqual(SectionClassifier.classify_heading("API"), "props")
        self.assertEqual(SectionClassifier.classify_heading("Button Props"), "props")
        self.assertEqual(SectionClassifier.classify_heading("属性"), "props")
        self.assertEqual(SectionClassifier.classify_heading("Events"), "events")
        self.assertEqual(SectionClassifier.classify_heading("事件"), "events")
        self.assertEqual(SectionClassifier.classify_heading("Slots"), "slots")
        self.assertEqual(SectionClassifier.classify_heading("插槽"), "slots")
        self.assertEqual(SectionClassifier.classify_heading("Methods"), "methods")
        self.assertEqual(SectionClassifier.classify_heading("方法"), "methods")
        self.assertIsNone(SectionClassifier.classify_heading("代码演示"))

    def test_first_matching_kind_wins(self):
        # "api" comes before "event" in the keyword order
        self.assertEqual(SectionClassifier.classify_heading("Event API"), "props")

    def test_heading_without_table_before_next_heading(self):
        soup = BeautifulSoup("""
            <h2>Slots</h2><p>none</p>
            <h2>Methods</h2><table><tr><th>名称</th></tr><tr><td>focus()</td></tr></table>
        """, "html.parser")
        sections = SectionClassifier.find_api_sections(soup)
        self.assertEqual([(kind, table is not None) for kind, _, table in sections],
                         [("slots", False), ("methods", True)])

    def test_unclassified_headings_ignored(self):
        soup = BeautifulSoup("<h2>何时使用</h2><table><tr><td>x</td></tr></table>", "html.parser")
        self.assertEqual(SectionClassifier.find_api_sections(soup), [])


class TestRowMapper(unittest.TestCase):
    def test_placeholder_name_skipped(self):
        items = map_rows(["参数", "说明"], [["-", "nothing"], ["size", "大小"]])
        self.assertEqual([item.name for item in items], ["size"])

    def test_first_cell_fallback_without_name_column(self):
        items = map_rows(["Foo", "说明"], [["size", "大小"], ["", "empty"]])
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0].name, "size")
        self.assertEqual(items[0].description, "大小")

    def test_empty_name_skipped(self):
        self.assertEqual(map_rows(["参数", "说明"], [["", "x"], []]), [])

    def test_absent_fields_are_none(self):
        items = map_rows(["参数", "说明", "类型"], [["size", "", "string"]])
        item = items[0]
        self.assertIsNone(item.description)
        self.assertIsNone(item.default_value)
        self.assertIsNone(item.since)
        self.assertIsNone(item.deprecated)
        self.assertIsNone(item.values)
        self.assertFalse(item.required)

    def test_short_rows_read_defensively(self):
        items = map_rows(["参数", "说明", "类型", "默认值"], [["size"]])
        self.assertEqual(items[0].name, "size")
        self.assertIsNone(items[0].type)

    def test_values_column_split(self):
        items = map_rows(["参数", "可选值", "类型"], [["size", "small，middle、large | mini", "'x' | 'y'"]])
        self.assertEqual(items[0].values, ["small", "middle", "large", "mini"])

    def test_empty_values_column_does_not_fall_back_to_type(self):
        items = map_rows(["参数", "可选值", "类型"], [["size", "", "'x' | 'y'"]])
        self.assertIsNone(items[0].values)

    def test_values_from_type_without_values_column(self):
        items = map_rows(["参数", "类型"], [["size", "'x' | \"y\""]])
        self.assertEqual(items[0].values, ["x", "y"])

    def test_required_column(self):
        items = map_rows(["参数", "必填"], [["a", "是"], ["b", "否"]])
        self.assertEqual([item.required for item in items], [True, False])

    def test_duplicate_canonical_column_last_wins(self):
        items = map_rows(["参数", "说明", "描述"], [["size", "first", "second"]])
        self.assertEqual(items[0].description, "second")

    def test_duplicate_rows_are_kept(self):
        items = map_rows(["参数"], [["size"], ["size"]])
        self.assertEqual(len(items), 2)

    def test_item_context(self):
        item = map_rows(["参数"], [["click"]], kind="events")[0]
        self.assertEqual(item.kind, "events")
        self.assertEqual(item.version, "v4")
        self.assertEqual(item.component_tag, "a-button")
        self.assertEqual(item.source_url, BUTTON_URL)


class TestApiExtractor(unittest.TestCase):
    def test_end_to_end_single_row(self):
        html = """
            <h2>属性</h2>
            <table>
              <tr><th>参数</th><th>说明</th><th>类型</th><th>默认值</th></tr>
              <tr><td>size</td><td>按钮大小</td><td>'small' | 'large'</td><td>small</td></tr>
            </table>"""
        items = ApiExtractor.extract_api_sections(html, "v4", "a-button", BUTTON_URL)
        self.assertEqual(len(items), 1)
        item = items[0]
        self.assertEqual(item.kind, "props")
        self.assertEqual(item.name, "size")
        self.assertEqual(item.description, "按钮大小")
        self.assertEqual(item.type, "'small' | 'large'")
        self.assertEqual(item.default_value, "small")
        self.assertEqual(item.values, ["small", "large"])
        self.assertFalse(item.required)

    def test_full_page(self):
        items = ApiExtractor.extract_api_sections(BUTTON_PAGE, "v4", "a-button", BUTTON_URL)
        by_kind = {}
        for item in items:
            by_kind.setdefault(item.kind, []).append(item.name)

        self.assertEqual(by_kind["props"], ["size", "type", "disabled"])
        self.assertEqual(by_kind["events"], ["click"])
        self.assertEqual(by_kind["methods"], ["blur()", "focus()"])
        self.assertNotIn("slots", by_kind)

        type_prop = items[1]
        self.assertEqual(type_prop.values, ["primary", "dashed", "link"])
        self.assertEqual(type_prop.since, "1.0")
        self.assertIsNone(items[2].values)

    def test_multiple_sections_of_same_kind_concatenate(self):
        html = """
            <h2>Props</h2><table><tr><th>参数</th></tr><tr><td>a</td></tr></table>
            <h3>Item Props</h3><table><tr><th>参数</th></tr><tr><td>b</td></tr></table>
        """
        items = ApiExtractor.extract_api_sections(html, "v3", "a-menu", "u")
        self.assertEqual([(i.kind, i.name) for i in items], [("props", "a"), ("props", "b")])

    def test_page_without_api_sections(self):
        self.assertEqual(ApiExtractor.extract_api_sections("<h1>x</h1>", "v4", "a-x", "u"), [])


if __name__ == "__main__":
    unittest.main()
