import unittest

from dosecalc.tools.carb_converter import CarbEditMode, CarbFields


class CarbFieldsTests(unittest.TestCase):
    def test_editing_grams_derives_units(self):
        fields = CarbFields()
        fields.edit_grams("45")
        self.assertEqual(fields.mode, CarbEditMode.GRAMS)
        self.assertEqual(fields.grams, "45")
        self.assertEqual(fields.units, "3")

    def test_editing_units_derives_grams(self):
        fields = CarbFields()
        fields.edit_units("2")
        self.assertEqual(fields.mode, CarbEditMode.UNITS)
        self.assertEqual(fields.units, "2")
        self.assertEqual(fields.grams, "30")
        self.assertEqual(fields.carbs_g, 30.0)

    def test_last_edit_wins(self):
        fields = CarbFields()
        fields.edit_units("4")
        fields.edit_grams("22.5")
        self.assertEqual(fields.mode, CarbEditMode.GRAMS)
        self.assertEqual(fields.grams, "22.5")
        self.assertEqual(fields.units, "2")

    def test_cleared_edit_clears_counterpart(self):
        fields = CarbFields()
        fields.edit_grams("60")
        fields.edit_grams("")
        self.assertEqual(fields.units, "")

        fields.edit_units("3")
        fields.edit_units("0")
        self.assertEqual(fields.grams, "")

        fields.edit_grams("abc")
        self.assertEqual(fields.units, "")

    def test_no_derivation_without_edit(self):
        fields = CarbFields(grams="45", units="9")
        fields.recompute()
        self.assertEqual(fields.mode, CarbEditMode.NONE)
        self.assertEqual((fields.grams, fields.units), ("45", "9"))

    def test_slider_clamps_and_snaps(self):
        fields = CarbFields()
        fields.slide_units(15)
        self.assertEqual(fields.units, "10")
        self.assertEqual(fields.grams, "150")

        fields.slide_units("4.4")
        self.assertEqual(fields.units, "4")
        self.assertEqual(fields.grams, "60")

        fields.slide_units(-3)
        self.assertEqual(fields.units, "0")
        self.assertEqual(fields.grams, "")

    def test_conversion_does_not_drift(self):
        fields = CarbFields()
        for grams in (7, 8, 22, 50, 98, 131):
            with self.subTest(grams=grams):
                fields.edit_grams(str(grams))
                fields.edit_units(fields.units)
                first = float(fields.grams or 0)
                self.assertLessEqual(abs(first - grams), 7.5)
                fields.edit_grams(fields.grams)
                fields.edit_units(fields.units)
                self.assertEqual(float(fields.grams or 0), first)

    def test_clear(self):
        fields = CarbFields()
        fields.edit_units("3")
        fields.clear()
        self.assertEqual((fields.grams, fields.units, fields.mode), ("", "", CarbEditMode.NONE))


if __name__ == "__main__":
    unittest.main()
