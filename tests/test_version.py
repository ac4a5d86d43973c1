import unittest
from datetime import datetime

from cgmlst_scraper.detail import SchemeDetail
from cgmlst_scraper.version import (
    VersionInfo,
    last_change_report,
    parse_last_change,
    resolve_version,
)


class TestParseLastChange(unittest.TestCase):
    """Test suite for the last-change timestamp parser."""

    def test_site_format(self):
        self.assertEqual(parse_last_change('January 5, 2024, 10:30'), datetime(2024, 1, 5, 10, 30))

    def test_without_commas(self):
        self.assertEqual(parse_last_change('March 12 2021 08:05'), datetime(2021, 3, 12, 8, 5))

    def test_24_hour_clock(self):
        self.assertEqual(parse_last_change('June 26, 2018, 17:18'), datetime(2018, 6, 26, 17, 18))

    def test_abbreviated_month_with_period(self):
        self.assertEqual(parse_last_change('Jan. 5, 2024, 10:30'), datetime(2024, 1, 5, 10, 30))

    def test_sept_abbreviation(self):
        self.assertEqual(parse_last_change('Sept. 3, 2019, 9:15'), datetime(2019, 9, 3, 9, 15))

    def test_12_hour_clock(self):
        self.assertEqual(parse_last_change('Feb. 1, 2022, 3:45 p.m.'), datetime(2022, 2, 1, 15, 45))
        self.assertEqual(parse_last_change('Feb. 1, 2022, 12:10 a.m.'), datetime(2022, 2, 1, 0, 10))
        self.assertEqual(parse_last_change('February 1, 2022, 3:45PM'), datetime(2022, 2, 1, 15, 45))

    def test_hour_only_and_noon(self):
        self.assertEqual(parse_last_change('Oct. 7, 2020, 4 p.m.'), datetime(2020, 10, 7, 16, 0))
        self.assertEqual(parse_last_change('Oct. 7, 2020, noon'), datetime(2020, 10, 7, 12, 0))
        self.assertEqual(parse_last_change('Oct. 7, 2020, midnight'), datetime(2020, 10, 7, 0, 0))

    def test_unparseable_returns_none(self):
        for text in ('', None, 'yesterday', '2024-01-05 10:30', 'January 5, 2024', 'Smarch 5, 2024, 10:30'):
            self.assertIsNone(parse_last_change(text), text)


class TestResolveVersion(unittest.TestCase):
    """Test suite for resolving VersionInfo from a SchemeDetail."""

    def test_all_fields_present(self):
        detail = SchemeDetail({
            'Name': 'Acinetobacter baumannii',
            'Version': '1.0',
            'Last Change': 'January 5, 2024, 10:30',
        })
        info = resolve_version(detail)
        self.assertEqual(info.name, 'Acinetobacter baumannii')
        self.assertEqual(info.version, '1.0')
        self.assertEqual(info.last_change_raw, 'January 5, 2024, 10:30')
        self.assertEqual(info.last_change_stamp, '2024-01-05-10-30')

    def test_empty_detail_gives_all_absent(self):
        self.assertEqual(resolve_version(SchemeDetail()), VersionInfo())

    def test_missing_last_change(self):
        info = resolve_version(SchemeDetail({'Name': 'Ecoli', 'Version': '2.1'}))
        self.assertIsNone(info.last_change_raw)
        self.assertIsNone(info.last_change_parsed)
        self.assertIsNone(info.last_change_stamp)
        self.assertEqual(info.version, '2.1')

    def test_malformed_last_change_keeps_other_fields(self):
        info = resolve_version(SchemeDetail({'Name': 'Ecoli', 'Version': '2.1', 'Last Change': 'soon'}))
        self.assertEqual(info.last_change_raw, 'soon')
        self.assertIsNone(info.last_change_parsed)
        self.assertEqual(info.name, 'Ecoli')

    def test_accepts_plain_mapping(self):
        info = resolve_version({'Version': '3'})
        self.assertEqual(info.version, '3')


class TestLastChangeReport(unittest.TestCase):

    def test_report_with_last_change(self):
        info = VersionInfo(name='Ecoli', version='1', last_change_raw='January 5, 2024, 10:30')
        self.assertEqual(
            [label for label, _ in last_change_report(info)],
            ['Name', 'Version', 'Last Change'],
        )

    def test_report_without_last_change(self):
        info = VersionInfo(name='Ecoli', version='1')
        self.assertEqual(last_change_report(info), [('Name', 'Ecoli'), ('Version', '1')])


if __name__ == '__main__':
    unittest.main()
