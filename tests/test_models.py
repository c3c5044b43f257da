from zkdir.models import NoteInfo, NoteInfoReq


def test_note_info_req_parse():
    assert NoteInfoReq.parse('path,backlinks') == NoteInfoReq(path=True, backlinks=True)
    assert NoteInfoReq.parse(' title , tags,') == NoteInfoReq(title=True, tags=True)
    assert NoteInfoReq.parse(['links']) == NoteInfoReq(links=True)
    req = NoteInfoReq(identifier=True)
    assert NoteInfoReq.parse(req) is req


def test_note_info_req_presets():
    assert not NoteInfoReq.internal().backlinks
    assert NoteInfoReq.internal().links
    assert NoteInfoReq.full() == NoteInfoReq(True, True, True, True, True, True)


def test_as_json():
    info = NoteInfo('/notes/202012091130 Example.txt', '202012091130', 'Example', {'#b', '#a'},
                    ['202109011200'], ['/notes/202109011200 Other.txt'])
    assert info.as_json() == {
        'path': '/notes/202012091130 Example.txt',
        'identifier': '202012091130',
        'title': 'Example',
        'tags': ['#a', '#b'],
        'links': ['202109011200'],
        'backlinks': ['/notes/202109011200 Other.txt']
    }
