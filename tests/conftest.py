"""Shared test fixtures for the cg3_stream test suite.

WHY: Most test modules need the same realistic analyser output. Keeping
the sample streams here avoids duplication and keeps every test on the
same data.

HOW: Module-level constants hold two streams produced by a North Sámi
grammar: a morphological analysis with compound sub-readings, and a
disambiguated, dependency-annotated pair of sentences. Fixtures wrap
them in Output objects.

RULES:
- Streams are written with explicit \\t and \\n escapes; every ": " line
  carries its trailing space
- ANALYSED_STREAM has one sentence ending in a CLB-tagged "."
- DISAMBIGUATED_STREAM has two identical sentences separated by an
  escaped newline line
"""

import pytest

from cg3_stream.core.output import Output


ANALYSED_STREAM = (
    "\"<Wikipedia>\"\n"
    "\t\"Wikipedia\" Err/Orth N Prop Sem/Org Attr <W:0.0>\n"
    "\t\"Wikipedia\" Err/Orth N Prop Sem/Org Sg Nom <W:0.0>\n"
    "\t\"Wikipedia\" N Prop Sem/Org Sg Nom <W:0.0>\n"
    ": \n"
    "\"<lea>\"\n"
    "\t\"leat\" V IV Ind Prs Sg3 <W:0.0>\n"
    ": \n"
    "\"<friddja>\"\n"
    "\t\"friddja\" A Sem/Hum Attr <W:0.0>\n"
    "\t\"friddja\" Adv <W:0.0>\n"
    ": \n"
    "\"<diehtosátnegirji>\"\n"
    "\t\"sátnegirji\" N Sem/Txt Sg Nom <W:0.0>\n"
    "\t\t\"diehtu\" N Sem/Prod-cogn_Txt Cmp/SgNom Cmp/SoftHyph Err/Orth Cmp <W:0.0>\n"
    "\t\"girji\" N Sem/Txt Sg Nom <W:0.0>\n"
    "\t\t\"sátni\" N Sem/Cat Cmp/SgNom Cmp <W:0.0>\n"
    "\t\t\t\"diehtu\" N Sem/Prod-cogn_Txt Cmp/SgNom Cmp/SoftHyph Err/Orth Cmp <W:0.0>\n"
    ": \n"
    "\"<badjel>\"\n"
    "\t\"badjel\" Adv Sem/Plc <W:0.0>\n"
    "\t\"badjel\" Po <W:0.0>\n"
    ": \n"
    "\"<300>\"\n"
    "\t\"300\" Num Arab Sg Acc <W:0.0>\n"
    ": \n"
    "\"<gielainn>\"\n"
    "\t\"gielainn\" ?\n"
    "\"<.>\"\n"
    "\t\".\" CLB <W:0.0>\n"
    ": \n"
)

_SENTENCE = (
    "\"<sáddejuvvot>\"\n"
    "\t\"sáddet\" VV TVV Der/PassL <mv> V IV Ind Prs Sg2 <W:0> @+FMAINV #1->1\n"
    ": \n"
    "\"<báhpirat>\"\n"
    "\t\"bábir\" N Sem/Mat_Txt Pl Nom <W:0> @<SUBJ #2->2\n"
    ": \n"
    "\"<interneahta>\"\n"
    "\t\"interneahtta\" N Sem/Plc-abstr Sg Gen <W:0> @>P #3->4\n"
    ": \n"
    "\"<badjel>\"\n"
    "\t\"badjel\" Po <W:0> @<ADVL &lex-bokte-not-badjel #4->4\n"
    "\t\"bokte\" Po <W:0> @<ADVL &SUGGEST #4->4\n"
    "\"<.>\"\n"
    "\t\".\" CLB <W:0> #5->5\n"
)

DISAMBIGUATED_STREAM = _SENTENCE + ":\\n\n" + _SENTENCE + ":\n"

DISAMBIGUATED_SENTENCE = "sáddet bábir interneahtta badjel."


@pytest.fixture
def analysed_output():
    """Output wrapping the morphological analysis sample."""
    return Output(ANALYSED_STREAM)


@pytest.fixture
def disambiguated_output():
    """Output wrapping the two-sentence disambiguated sample."""
    return Output(DISAMBIGUATED_STREAM)
