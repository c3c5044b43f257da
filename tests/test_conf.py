from dataclasses import FrozenInstanceError, replace
import pytest
from zkdir.conf import ZkConf, default_ignore
from zkdir.repos.direct import DirectRepo
from zkdir.repos.grep import GrepRepo


def test_default_ignore():
    assert default_ignore('/notes', '.git')
    assert default_ignore('/notes', '.202012091130 Hidden.txt')
    assert default_ignore('/notes', 'bar.icloud')

    assert not default_ignore('/notes', '202012091130 Example.txt')
    assert not default_ignore('/notes', 'icloud.txt')


def test_standardize(fs):
    fs.create_dir('/real/notes')
    fs.create_symlink('/link', '/real')
    conf = ZkConf(directory='/link/notes', extension='.md').standardize()
    assert conf.directory == '/real/notes'
    assert conf.extension == 'md'


def test_standardize_expands_user(fs):
    conf = ZkConf(directory='~/zettels').standardize()
    assert not conf.directory.startswith('~')
    assert conf.directory.endswith('/zettels')


def test_immutable():
    conf = ZkConf(directory='/notes')
    with pytest.raises(FrozenInstanceError):
        conf.extension = 'md'
    assert replace(conf, extension='md').extension == 'md'
    assert conf.extension == 'txt'


def test_repo():
    assert type(ZkConf(directory='/notes').repo()) is DirectRepo
    assert type(ZkConf(directory='/notes', search_backend='grep').repo()) is GrepRepo
    with pytest.raises(ValueError):
        ZkConf(directory='/notes', search_backend='bogus').repo()


def test_for_user_requires_conf(fs, monkeypatch):
    monkeypatch.setenv('HOME', '/home/someone')
    fs.create_file('/home/someone/.zkdir.conf.py', contents='x = 1')
    with pytest.raises(Exception, match='assign an instance of ZkConf'):
        ZkConf.for_user()
