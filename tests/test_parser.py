import pytest

from procedure_model import MalformedDocument, NameGroup, Section, Step, Task
from procedure_xml import normalize_text, parse_procedure, parse_procedure_file
from sequencer import ProcedureSession, index

FULL_XML = """<?xml version="1.0" encoding="UTF-8"?>
<procedure title="Database upgrade">
  <section num="1" title="Preparation">
    <precis>
        Make sure   everyone
        is	ready.
    </precis>
    <step num="1">
      <title>  Notify users </title>
      <name who="joe">
        <task done="true">Send email</task>
        <task>Post on
          the wiki</task>
      </name>
    </step>
    <step num="2" title="Backup">
      <name who="fred"><task done="no">Dump</task></name>
    </step>
  </section>
  <section num="2" title="Cutover">
    <step num="3" title="Switch"><name who="scarlet"><task/></name></step>
  </section>
</procedure>
"""


def test_sample_xml_gives_same_identifiers(sample_xml, make_procedure):
    parsed = index(parse_procedure(sample_xml))
    built = index(make_procedure())
    assert len(parsed) == len(built) == 12
    assert parsed.fingerprint == built.fingerprint
    assert [parsed.kind(i) for i in parsed.ids()] == [built.kind(i) for i in built.ids()]


def test_parsed_sample_behaves_like_original(sample_xml):
    session = ProcedureSession(parse_procedure(sample_xml))
    assert session.mark_task_done(4) == 5
    assert session.first_task(2, "fred") == 7
    assert session.next_step(2) == 9
    task = session.element(11)
    assert isinstance(task, Task) and task.text == "Jumping up and down"


def test_attributes_titles_and_precis():
    doc = parse_procedure(FULL_XML)
    assert doc.title == "Database upgrade"
    assert len(doc.sections) == 2

    prep = doc.sections[0]
    assert isinstance(prep, Section)
    assert (prep.num, prep.title) == ("1", "Preparation")
    assert prep.precis == "Make sure everyone is ready."

    notify, backup = prep.steps
    assert isinstance(notify, Step)
    assert (notify.num, notify.title) == ("1", "Notify users")
    assert backup.title == "Backup"

    joe = notify.names[0]
    assert isinstance(joe, NameGroup) and joe.who == "joe"
    assert [t.text for t in joe.tasks] == ["Send email", "Post on the wiki"]
    assert [t.done for t in joe.tasks] == [True, False]
    assert backup.names[0].tasks[0].done is False

    cutover = doc.sections[1]
    assert cutover.precis is None
    assert cutover.steps[0].names[0].tasks[0].text == ""


def test_done_attribute_survives_indexing():
    session = ProcedureSession(parse_procedure(FULL_XML))
    first = session.first_task(session.root, "joe")
    assert session.is_task_done(first)
    assert not session.is_name_group_done(first)


def test_parse_file(tmp_path, sample_xml):
    path = tmp_path / "sample.xml"
    path.write_text(sample_xml, encoding="utf-8")
    assert len(index(parse_procedure_file(path))) == 12


@pytest.mark.parametrize(
    "markup",
    [
        "",
        "<section></section>",
        "<procedure></procedure><procedure></procedure>",
        "<procedure><step></step></procedure>",
        "<procedure><section><name who='joe'></name></section></procedure>",
        "<procedure><section><step><task>x</task></step></section></procedure>",
        "<procedure><section><step><name><task>x</task></name></step></section></procedure>",
        "<procedure><section><step><name who='  '></name></step></section></procedure>",
        "<procedure><section><step><name who='joe'><task done='maybe'>x</task></name></step></section></procedure>",
        "<procedure><section><step><name who='joe'><task done=''>x</task></name></step></section></procedure>",
        "<procedure><section><precis>a</precis><precis>b</precis></section></procedure>",
    ],
)
def test_malformed_markup(markup):
    with pytest.raises(MalformedDocument):
        parse_procedure(markup)


def test_normalize_text():
    assert normalize_text("\n\t a  b\n c \t") == "a b c"
    assert normalize_text("") == ""


def test_who_is_kept_verbatim():
    doc = parse_procedure(
        "<procedure><section><step>"
        "<name who=' joe'><task>a</task></name>"
        "<name who='joe'><task>b</task></name>"
        "</step></section></procedure>"
    )
    padded, plain = doc.sections[0].steps[0].names
    assert padded.who == " joe"
    assert plain.who == "joe"

    session = ProcedureSession(doc)
    assert session.first_task(session.root, "joe") == 6
    assert session.first_task(session.root, " joe") == 4
