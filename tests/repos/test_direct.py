import logging
from pathlib import Path
import pytest
from zkdir.conf import ZkConf
from zkdir.models import CreateCmd, MoveCmd, ReplaceTextCmd, InsertTextCmd


def repo(**kwargs):
    return ZkConf(directory='/notes', **kwargs).standardize().repo()


def test_list_files(fs):
    fs.create_file('/notes/b.txt')
    fs.create_file('/notes/a.txt')
    fs.create_file('/notes/c.md')
    fs.create_file('/notes/.hidden.txt')
    fs.create_file('/notes/foo.icloud')
    fs.create_file('/notes/sub/d.txt')
    assert repo().list_files() == ['/notes/a.txt', '/notes/b.txt']
    assert repo(extension='md').list_files() == ['/notes/c.md']


def test_list_files_custom_ignore(fs):
    fs.create_file('/notes/a.txt')
    fs.create_file('/notes/draft.txt')
    r = repo(ignore=lambda parent, name: name.startswith('draft'))
    assert r.list_files() == ['/notes/a.txt']


def test_list_files_missing_directory(fs):
    with pytest.raises(FileNotFoundError):
        repo().list_files()


def test_search(fs):
    fs.create_file('/notes/one.txt', contents='I mention 202012091130 here.')
    fs.create_file('/notes/two.txt', contents='Nothing to see.')
    fs.create_file('/notes/three.txt', contents='Case: HELLO World')
    fs.create_file('/notes/four.md', contents='202012091130 but wrong extension')
    r = repo()
    assert r.search('202012091130') == ['/notes/one.txt']
    assert r.search('hello world') == ['/notes/three.txt']
    # fixed string, not a regex
    assert r.search('.*') == []
    assert r.search('absent') == []


def test_texts(fs):
    fs.create_file('/notes/one.txt', contents='1')
    fs.create_file('/notes/two.txt', contents='2')
    assert list(repo().texts()) == [('/notes/one.txt', '1'), ('/notes/two.txt', '2')]


def test_change(fs):
    fs.create_file('/notes/one.txt', contents='Old title here. Old title there.\nOld title again.')
    fs.create_file('/notes/two.txt', contents='Old title in header\nOld title in body')
    fs.create_file('/notes/three.txt', contents='Hello world')
    edits = [CreateCmd('/notes/new.txt', contents='brand new'),
             ReplaceTextCmd('/notes/one.txt', 'Old title', 'New title'),
             MoveCmd('/notes/one.txt', '/notes/moved.txt'),
             ReplaceTextCmd('/notes/two.txt', 'Old title', 'New title', first_line_only=True),
             InsertTextCmd('/notes/three.txt', 5, ',')]
    repo().change(edits)
    assert Path('/notes/new.txt').read_text() == 'brand new'
    assert not Path('/notes/one.txt').exists()
    assert Path('/notes/moved.txt').read_text() == 'New title here. New title there.\nNew title again.'
    assert Path('/notes/two.txt').read_text() == 'New title in header\nOld title in body'
    assert Path('/notes/three.txt').read_text() == 'Hello, world'
    assert sorted(p.name for p in Path('/notes').iterdir()) == ['moved.txt', 'new.txt', 'three.txt', 'two.txt']


def test_insert_past_end(fs):
    fs.create_file('/notes/one.txt', contents='abc')
    repo().insert_text('/notes/one.txt', 100, ' #tag')
    assert Path('/notes/one.txt').read_text() == 'abc #tag'


def test_create_does_not_overwrite(fs):
    fs.create_file('/notes/one.txt', contents='original')
    with pytest.raises(FileExistsError):
        repo().create('/notes/one.txt', 'replacement')
    assert Path('/notes/one.txt').read_text() == 'original'


def test_change_rolls_back_text_when_move_fails(fs):
    fs.create_file('/notes/one.txt', contents='Old title')
    fs.create_file('/notes/taken.txt', contents='taken')
    edits = [ReplaceTextCmd('/notes/one.txt', 'Old title', 'New title'),
             MoveCmd('/notes/one.txt', '/notes/taken.txt')]
    with pytest.raises(FileExistsError):
        repo().change(edits)
    assert Path('/notes/one.txt').read_text() == 'Old title'
    assert Path('/notes/taken.txt').read_text() == 'taken'


def test_change_rolls_back_move_when_text_fails(fs):
    fs.create_file('/notes/one.txt', contents='Old title')
    edits = [CreateCmd('/notes/created.txt', contents='x'),
             MoveCmd('/notes/one.txt', '/notes/two.txt'),
             ReplaceTextCmd('/notes/missing.txt', 'Old title', 'New title')]
    with pytest.raises(FileNotFoundError):
        repo().change(edits)
    assert Path('/notes/one.txt').read_text() == 'Old title'
    assert not Path('/notes/two.txt').exists()
    assert not Path('/notes/created.txt').exists()


def test_preview(fs, capsys):
    fs.create_file('/notes/one.txt', contents='Old title')
    edits = [ReplaceTextCmd('/notes/one.txt', 'Old title', 'New title'),
             MoveCmd('/notes/one.txt', '/notes/two.txt')]
    repo(preview_mode=True).change(edits)
    assert Path('/notes/one.txt').read_text() == 'Old title'
    assert not Path('/notes/two.txt').exists()
    out, err = capsys.readouterr()
    assert out == ''.join(f'{e}\n' for e in edits)


def test_texts_skips_undecodable(fs, caplog):
    fs.create_file('/notes/one.txt', contents='1')
    fs.create_file('/notes/latin1.txt', contents=b'caf\xe9 #old')
    fs.create_file('/notes/two.txt', contents='2 #new')
    r = repo()
    with caplog.at_level(logging.WARNING):
        assert list(r.texts()) == [('/notes/one.txt', '1'), ('/notes/two.txt', '2 #new')]
        assert r.search('#') == ['/notes/two.txt']
    assert '/notes/latin1.txt' in caplog.text
    with pytest.raises(UnicodeDecodeError):
        r.read_text('/notes/latin1.txt')
