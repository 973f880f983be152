import unittest
from dataclasses import MISSING, fields, replace

from osha_log.records.schema import (
    INCIDENT_REQUIRED_FIELDS, MAX_INT, SUMMARY_REQUIRED_FIELDS, UNKNOWN_LABEL, AnnualSummary, IncidentRecord,
    incident_from_dict, incident_outcome_label, incident_type_label, record_to_dict, summary_from_dict,
)
from osha_log.records.validation import (
    REQUIRED_MESSAGE, RecordValidationError, advisory_warnings, validate_incident, validate_summary,
)
from osha_log.seed import sample_incidents, sample_summary
from record_payloads import incident_payload, summary_payload


class TestLabels(unittest.TestCase):
    def test_known_codes(self):
        self.assertEqual(incident_outcome_label(1), "Death")
        self.assertEqual(incident_outcome_label(3), "Job transfer or restriction")
        self.assertEqual(incident_outcome_label(6), "Not recorded")
        self.assertEqual(incident_type_label(1), "Injury")
        self.assertEqual(incident_type_label(4), "Poisoning")
        self.assertEqual(incident_type_label(6), "All other illnesses")

    def test_unknown_codes(self):
        for code in (0, 7, -1, 100):
            self.assertEqual(incident_outcome_label(code), UNKNOWN_LABEL)
            self.assertEqual(incident_type_label(code), UNKNOWN_LABEL)


class TestSchema(unittest.TestCase):
    def test_required_fields(self):
        self.assertEqual(len(INCIDENT_REQUIRED_FIELDS), 15)
        self.assertIn("nar_object_substance", INCIDENT_REQUIRED_FIELDS)
        self.assertNotIn("sex", INCIDENT_REQUIRED_FIELDS)

    def test_required_fields_have_no_default(self):
        no_default = {f.name for f in fields(IncidentRecord) if f.default is MISSING}
        self.assertEqual(no_default, set(INCIDENT_REQUIRED_FIELDS) | {"id"})
        no_default = {f.name for f in fields(AnnualSummary) if f.default is MISSING}
        self.assertEqual(no_default, set(SUMMARY_REQUIRED_FIELDS) | {"id"})

    def test_from_dict_defaults_and_bool(self):
        d = record_to_dict(sample_incidents()[0])
        for k in ("dafw_num_away", "djtr_num_tr", "time_unknown", "date_of_death"):
            d.pop(k)
        d["extra"] = "ignored"
        rec = incident_from_dict(d)
        self.assertEqual(rec.dafw_num_away, 0)
        self.assertEqual(rec.djtr_num_tr, 0)
        self.assertIs(rec.time_unknown, False)
        self.assertIsNone(rec.date_of_death)
        self.assertIs(incident_from_dict({**d, "time_unknown": 1}).time_unknown, True)

    def test_summary_round_trip(self):
        s = sample_summary()
        self.assertEqual(summary_from_dict(record_to_dict(s)), s)


class TestValidateIncident(unittest.TestCase):
    def test_valid_payload(self):
        rec = validate_incident(incident_payload())
        self.assertIsInstance(rec, IncidentRecord)
        self.assertTrue(rec.id)
        self.assertEqual(rec.year_of_filing, 2024)
        self.assertEqual(rec.case_number, 7)
        self.assertEqual(rec.dafw_num_away, 0)
        self.assertIs(rec.time_unknown, False)
        self.assertIsNone(rec.date_of_death)

    def test_keeps_supplied_id(self):
        self.assertEqual(validate_incident(incident_payload(id="abc")).id, "abc")

    def test_missing_required(self):
        with self.assertRaises(RecordValidationError) as cm:
            validate_incident(incident_payload(job_title="  ", nar_what_happened=None))
        self.assertEqual(cm.exception.errors["job_title"], REQUIRED_MESSAGE)
        self.assertEqual(cm.exception.errors["nar_what_happened"], REQUIRED_MESSAGE)

    def test_empty_payload_lists_every_required_field(self):
        with self.assertRaises(RecordValidationError) as cm:
            validate_incident({})
        self.assertEqual(set(cm.exception.errors), set(INCIDENT_REQUIRED_FIELDS))

    def test_codes_and_counters(self):
        with self.assertRaises(RecordValidationError) as cm:
            validate_incident(incident_payload(incident_outcome="7", type_of_incident=0, dafw_num_away=-2, djtr_num_tr="x"))
        errs = cm.exception.errors
        self.assertIn("incident_outcome", errs)
        self.assertIn("type_of_incident", errs)
        self.assertEqual(errs["dafw_num_away"], "Must not be negative")
        self.assertEqual(errs["djtr_num_tr"], "Must be a whole number")

    def test_dates(self):
        with self.assertRaises(RecordValidationError) as cm:
            validate_incident(incident_payload(date_of_incident="2024-05-06", date_of_death="tomorrow"))
        self.assertEqual(set(cm.exception.errors), {"date_of_incident", "date_of_death"})

    def test_time_unknown(self):
        self.assertIs(validate_incident(incident_payload(time_unknown="on")).time_unknown, True)
        self.assertIs(validate_incident(incident_payload(time_unknown=True)).time_unknown, True)
        self.assertIs(validate_incident(incident_payload(time_unknown="")).time_unknown, False)
        with self.assertRaises(RecordValidationError):
            validate_incident(incident_payload(time_unknown="maybe"))

    def test_text_fields_must_be_strings(self):
        with self.assertRaises(RecordValidationError) as cm:
            validate_incident(incident_payload(sex=["M"], job_title={"a": 1}, time_of_incident=1430, id=5))
        errs = cm.exception.errors
        self.assertEqual(set(errs), {"sex", "job_title", "time_of_incident", "id"})
        self.assertEqual(errs["sex"], "Must be text")

    def test_non_text_date_reports_once(self):
        with self.assertRaises(RecordValidationError) as cm:
            validate_incident(incident_payload(date_of_hire=20100304))
        self.assertEqual(cm.exception.errors, {"date_of_hire": "Must be text"})

    def test_integer_upper_bound(self):
        self.assertEqual(validate_incident(incident_payload(case_number=str(MAX_INT))).case_number, MAX_INT)
        with self.assertRaises(RecordValidationError) as cm:
            validate_incident(incident_payload(case_number="99999999999999999999", dafw_num_away=MAX_INT + 1))
        self.assertEqual(cm.exception.errors["case_number"], "Number is too large")
        self.assertIn("dafw_num_away", cm.exception.errors)

    def test_error_is_value_error(self):
        self.assertTrue(issubclass(RecordValidationError, ValueError))


class TestValidateSummary(unittest.TestCase):
    def test_valid(self):
        s = validate_summary(summary_payload(total_hours_worked="260000", change_reason=""))
        self.assertEqual(s.total_hours_worked, 260000)
        self.assertIsNone(s.change_reason)
        self.assertTrue(s.id)

    def test_negative_totals_and_flag(self):
        with self.assertRaises(RecordValidationError) as cm:
            validate_summary(summary_payload(total_deaths=-1, no_injuries_illnesses=2))
        self.assertIn("total_deaths", cm.exception.errors)
        self.assertIn("no_injuries_illnesses", cm.exception.errors)

    def test_required(self):
        with self.assertRaises(RecordValidationError) as cm:
            validate_summary(summary_payload(ein="", naics_code=None))
        self.assertEqual(set(cm.exception.errors), {"ein", "naics_code"})

    def test_no_injuries_checkbox_bool(self):
        self.assertEqual(validate_summary(summary_payload(no_injuries_illnesses=True)).no_injuries_illnesses, 1)
        self.assertEqual(validate_summary(summary_payload(no_injuries_illnesses=False)).no_injuries_illnesses, 0)

    def test_text_and_bounds(self):
        with self.assertRaises(RecordValidationError) as cm:
            validate_summary(summary_payload(zip=62701, change_reason=["late"], total_hours_worked=2**63))
        self.assertEqual(set(cm.exception.errors), {"zip", "change_reason", "total_hours_worked"})


class TestAdvisoryWarnings(unittest.TestCase):
    def test_clean_seed_data(self):
        self.assertEqual(advisory_warnings(sample_incidents(), [sample_summary()]), [])

    def test_duplicate_case_numbers(self):
        incs = sample_incidents()
        incs.append(replace(incs[0], id="dup"))
        warnings = advisory_warnings(incs, [])
        self.assertEqual(warnings, ["case number 1 appears 2 times for Manufacturing Plant 1 (2024)"])

    def test_same_case_number_other_year_is_fine(self):
        incs = sample_incidents()
        incs.append(replace(incs[0], id="next-year", year_of_filing=2025))
        self.assertEqual(advisory_warnings(incs, []), [])

    def test_no_injuries_flag_with_totals(self):
        s = replace(sample_summary(), no_injuries_illnesses=1)
        warnings = advisory_warnings([], [s])
        self.assertEqual(len(warnings), 1)
        self.assertIn("total_dafw_cases", warnings[0])
        empty = replace(
            s, total_dafw_cases=0, total_djtr_cases=0, total_other_cases=0, total_dafw_days=0,
            total_djtr_days=0, total_injuries=0, total_poisonings=0,
        )
        self.assertEqual(advisory_warnings([], [empty]), [])


if __name__ == "__main__":
    unittest.main()
