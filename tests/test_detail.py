import unittest

import responses

from cgmlst_scraper.detail import (
    SchemeDetail,
    detail_url,
    fetch_detail,
    fold_detail_rows,
    parse_scheme_detail,
)
from cgmlst_scraper.errors import DetailFetchError, NoTableFound

# Shape of https://www.cgmlst.org/ncs/scheme/scheme/<id>/
DETAIL_HTML = """
<html>
<body>
  <h1>Acinetobacter baumannii cgMLST</h1>
  <table class="table">
    <tr><td>Name</td><td>Acinetobacter baumannii</td></tr>
    <tr><td>Version</td><td>1.0</td></tr>
    <tr><td>Created</td><td>June 26, 2018, 12:18</td></tr>
    <tr><td>Last Change</td><td>January 5, 2024, 10:30</td></tr>
    <tr><td>Seed Genome</td><td>ACICU</td></tr>
    <tr><td></td><td>NC_010611.1</td></tr>
    <tr><td>Publications</td><td>Higgins et al. 2017</td></tr>
    <tr><td>Publications</td><td>Ruppitsch et al. 2015</td></tr>
  </table>
  <a href="https://www.cgmlst.org/ncs/schema/Abaumannii/alleles/">Download</a>
</body>
</html>
"""


class TestFoldDetailRows(unittest.TestCase):
    """Test suite for folding two-column rows into a SchemeDetail."""

    def test_blank_label_continues_previous_key(self):
        rows = [['Seed Genome', 'ACICU'], ['', 'NC_010611.1'], ['Version', '1.0']]
        detail = fold_detail_rows(rows)
        self.assertEqual(detail['Seed Genome'], 'ACICU; NC_010611.1')
        self.assertEqual(detail['Version'], '1.0')

    def test_forward_fill_uses_nearest_label_above(self):
        rows = [['A', '1'], ['B', '2'], ['', '3'], ['', '4'], ['C', '5']]
        detail = fold_detail_rows(rows)
        self.assertEqual(detail['A'], '1')
        self.assertEqual(detail['B'], '2; 3; 4')
        self.assertEqual(detail['C'], '5')

    def test_repeated_label_joins_in_row_order(self):
        rows = [['Publications', 'first'], ['Version', '2.0'], ['Publications', 'second']]
        detail = fold_detail_rows(rows)
        self.assertEqual(detail['Publications'], 'first; second')

    def test_keys_keep_first_appearance_order(self):
        rows = [['Name', 'x'], ['Version', '1'], ['Name', 'y'], ['Last Change', 'z']]
        self.assertEqual(list(fold_detail_rows(rows)), ['Name', 'Version', 'Last Change'])

    def test_leading_blank_label_is_dropped(self):
        rows = [['', 'orphan'], ['Name', 'x']]
        detail = fold_detail_rows(rows)
        self.assertEqual(dict(detail), {'Name': 'x'})

    def test_single_cell_row_has_empty_value(self):
        detail = fold_detail_rows([['Comment']])
        self.assertEqual(detail['Comment'], '')

    def test_empty_rows(self):
        detail = fold_detail_rows([])
        self.assertEqual(len(detail), 0)
        self.assertIsNone(detail.get('Name'))


class TestParseSchemeDetail(unittest.TestCase):

    def test_parse_detail_page(self):
        detail = parse_scheme_detail(DETAIL_HTML)
        self.assertIsInstance(detail, SchemeDetail)
        self.assertEqual(detail['Name'], 'Acinetobacter baumannii')
        self.assertEqual(detail['Last Change'], 'January 5, 2024, 10:30')
        self.assertEqual(detail['Seed Genome'], 'ACICU; NC_010611.1')
        self.assertEqual(detail['Publications'], 'Higgins et al. 2017; Ruppitsch et al. 2015')

    def test_header_row_is_skipped(self):
        html = """
        <table>
          <tr><th>Property</th><th>Value</th></tr>
          <tr><td>Name</td><td>Ecoli</td></tr>
        </table>
        """
        self.assertEqual(dict(parse_scheme_detail(html)), {'Name': 'Ecoli'})

    def test_missing_key_is_none(self):
        html = "<table><tr><td>Name</td><td>Ecoli</td></tr></table>"
        detail = parse_scheme_detail(html)
        self.assertNotIn('Last Change', detail)
        self.assertIsNone(detail.get('Last Change'))

    def test_page_without_table(self):
        with self.assertRaises(NoTableFound):
            parse_scheme_detail("<html><body>Not found</body></html>")


class TestFetchDetail(unittest.TestCase):

    def test_detail_url(self):
        self.assertEqual(detail_url('Abaumannii'), 'https://www.cgmlst.org/ncs/scheme/scheme/Abaumannii/')

    @responses.activate
    def test_fetch_detail(self):
        responses.add(responses.GET, detail_url('Abaumannii'), body=DETAIL_HTML, status=200)
        detail = fetch_detail('Abaumannii')
        self.assertEqual(detail['Version'], '1.0')

    @responses.activate
    def test_not_found_raises_detail_fetch_error(self):
        responses.add(responses.GET, detail_url('Nothing'), body='Not Found', status=404)
        with self.assertRaises(DetailFetchError) as cm:
            fetch_detail('Nothing')
        self.assertEqual(cm.exception.status_code, 404)


if __name__ == '__main__':
    unittest.main()
