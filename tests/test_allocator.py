import re
import pytest
from freezegun import freeze_time
from zkdir.allocator import IdAllocator
from zkdir.conf import ZkConf
from zkdir.repos.direct import DirectRepo
from zkdir.resolver import Resolver


def config(**kwargs):
    return ZkConf(directory='/notes', **kwargs)


@freeze_time('2020-12-09T11:30:45')
def test_allocate():
    assert IdAllocator(config(), lambda: set()).allocate() == '202012091130'


@freeze_time('2020-12-09T11:30:45')
def test_allocate_collision():
    allocator = IdAllocator(config(), lambda: {'202012091130', '202012091131', '202012091133'})
    result = allocator.allocate()
    assert result == '202012091132'
    assert int(result) > int(allocator.candidate())


@freeze_time('2020-12-09T11:30:45')
def test_allocate_repeatedly_against_snapshot():
    snapshot = frozenset({'202012091130', '202012091132'})
    allocator = IdAllocator(config(), lambda: snapshot)
    ids = [allocator.allocate() for _ in range(5)]
    assert ids == ['202012091131', '202012091133', '202012091134', '202012091135', '202012091136']
    assert len(set(ids)) == 5
    assert all(re.fullmatch(r'\d{12}', i) for i in ids)
    assert not snapshot.intersection(ids)


@freeze_time('2020-12-09T11:30:45')
def test_allocate_keeps_leading_zeros():
    conf = config(id_format='%m%d', id_pattern=r'\d{4}')
    assert IdAllocator(conf, lambda: {'1209'}).allocate() == '1210'
    conf = config(id_format='0%m%d', id_pattern=r'\d{5}')
    assert IdAllocator(conf, lambda: {'01209'}).allocate() == '01210'


@freeze_time('2020-12-09T11:30:45')
def test_allocate_from_directory(fs):
    fs.create_file('/notes/202012091130 One.txt')
    fs.create_file('/notes/202012091131 Two.txt')
    fs.create_file('/notes/202012091132 Ignored.md')
    conf = config().standardize()
    allocator = IdAllocator(conf, Resolver(conf, DirectRepo(conf)).identifiers)
    assert allocator.allocate() == '202012091132'


def test_allocate_unreadable_directory(fs):
    conf = config().standardize()
    allocator = IdAllocator(conf, Resolver(conf, DirectRepo(conf)).identifiers)
    with pytest.raises(FileNotFoundError):
        allocator.allocate()


@freeze_time('2020-12-09T11:30:45')
def test_allocate_non_numeric(mocker):
    mocker.patch('shortuuid.uuid', side_effect=['abcdefghijkl', 'mnopqrstuvwx'])
    conf = config(id_format='%Y-%m-%d', id_pattern=r'\d{4}-\d{2}-\d{2}(?:-\w{8})?')
    allocator = IdAllocator(conf, lambda: {'2020-12-09', '2020-12-09-abcdefgh'})
    assert allocator.allocate() == '2020-12-09-mnopqrst'


@freeze_time('2020-12-09T11:30:45')
def test_allocate_format_mismatch():
    with pytest.raises(ValueError, match='does not match id_pattern'):
        IdAllocator(config(id_format='%Y'), lambda: set()).allocate()
