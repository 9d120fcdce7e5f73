import unittest

from activity_grouper import group_activities_by_unit, initialize_schedule_data
from models import FilteredUnit, Offering

LEC_1 = Offering("Lecture", "MON", "9:00am - 10:00am", "G01")
LEC_2 = Offering("Lecture", "WED", "9:00am - 10:00am", "G01")
TUT_1 = Offering("Tutorial", "TUE", "1:00pm - 2:00pm", "T1")
LAB_1 = Offering("Lab", "THU", "3:00pm - 5:00pm", "L1")


class TestGroupActivitiesByUnit(unittest.TestCase):

    def setUp(self):
        self.filtered = {
            "CS101": FilteredUnit("Intro to Programming", (TUT_1, LEC_1, LAB_1, LEC_2)),
            "CS102": FilteredUnit("Data Structures", (LEC_2,)),
        }

    def test_groups_by_first_seen_activity(self):
        grouped = group_activities_by_unit(self.filtered)

        self.assertEqual([g.unit_code for g in grouped], ["CS101", "CS102"])
        first = grouped[0]
        self.assertEqual(first.unit_name, "Intro to Programming")
        self.assertEqual([a.activity_type for a in first.activities], ["Tutorial", "Lecture", "Lab"])
        self.assertEqual(first.group("Lecture").offerings, (LEC_1, LEC_2))
        self.assertIsNone(first.group("Seminar"))

    def test_regrouping_keeps_every_offering(self):
        for unit in group_activities_by_unit(self.filtered):
            total = sum(len(a.offerings) for a in unit.activities)
            self.assertEqual(total, len(self.filtered[unit.unit_code].offerings))

    def test_input_untouched(self):
        before = dict(self.filtered)
        group_activities_by_unit(self.filtered)
        self.assertEqual(self.filtered, before)

    def test_empty(self):
        self.assertEqual(group_activities_by_unit({}), [])

    def test_as_dict(self):
        unit = group_activities_by_unit({"CS102": self.filtered["CS102"]})[0]
        self.assertEqual(unit.as_dict(), {
            "unitCode": "CS102",
            "unitName": "Data Structures",
            "activities": [{
                "activityType": "Lecture",
                "offerings": [{
                    "activity": "Lecture",
                    "day": "WED",
                    "time": "9:00am - 10:00am",
                    "room": "G01",
                    "teachingStaff": "",
                    "classType": "",
                    "periodName": "",
                }],
            }],
        })


class TestInitializeScheduleData(unittest.TestCase):

    def test_fresh_containers(self):
        first = initialize_schedule_data()
        self.assertEqual(first["scheduledTimesPerDay"], {
            "MON": [], "TUE": [], "WED": [], "THU": [], "FRI": [],
        })
        self.assertEqual(first["finalSchedule"], {})

        first["scheduledTimesPerDay"]["MON"].append("9:00")
        self.assertEqual(initialize_schedule_data()["scheduledTimesPerDay"]["MON"], [])


if __name__ == "__main__":
    unittest.main()
