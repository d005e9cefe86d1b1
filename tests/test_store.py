from pathlib import Path

import pytest

from update_ssh_config.core.store import backup_config, read_config_lines, write_config_lines


def test_read_config_lines(tmp_path):
    p = tmp_path / 'config'
    p.write_bytes(b'Host a\r\n  HostName x\n\nHost b\n')
    assert read_config_lines(p) == ['Host a', '  HostName x', '', 'Host b']


def test_read_config_lines_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_config_lines(tmp_path / 'nope')


def test_write_truncates_and_terminates_lines(tmp_path):
    p = tmp_path / 'config'
    p.write_text('a much longer original file\n' * 10, encoding='utf-8')
    write_config_lines(p, ['Host a', '  HostName x', ''])
    assert p.read_text(encoding='utf-8') == 'Host a\n  HostName x\n\n'
    assert list(tmp_path.glob('*.tmp')) == []


def test_write_keeps_permissions(tmp_path):
    p = tmp_path / 'config'
    p.write_text('Host a\n', encoding='utf-8')
    p.chmod(0o600)
    write_config_lines(p, ['Host b'])
    assert p.stat().st_mode & 0o777 == 0o600


def test_write_creates_new_file(tmp_path):
    p = tmp_path / 'fresh'
    write_config_lines(p, ['Host a'])
    assert p.read_text(encoding='utf-8') == 'Host a\n'


def test_backup_config(tmp_path):
    p = tmp_path / 'config'
    p.write_text('Host a\n', encoding='utf-8')
    dest = backup_config(p)
    assert dest == tmp_path / 'config.bak'
    assert dest.read_text(encoding='utf-8') == 'Host a\n'


def test_write_follows_symlink(tmp_path):
    real = tmp_path / 'dotfiles_ssh_config'
    real.write_text('Host a\n  HostName old\n', encoding='utf-8')
    link = tmp_path / 'config'
    link.symlink_to(real.name)
    write_config_lines(link, ['Host a', '  HostName new'])
    assert link.is_symlink()
    assert real.read_text(encoding='utf-8') == 'Host a\n  HostName new\n'


def test_invalid_utf8_bytes_round_trip(tmp_path):
    p = tmp_path / 'config'
    p.write_bytes(b'# caf\xe9 server\nHost a\n  HostName old\n')
    lines = read_config_lines(p)
    lines[2] = '  HostName new'
    write_config_lines(p, lines)
    assert p.read_bytes() == b'# caf\xe9 server\nHost a\n  HostName new\n'


def test_temp_file_has_final_mode_while_writing(tmp_path):
    p = tmp_path / 'config'
    p.write_text('Host a\n', encoding='utf-8')
    p.chmod(0o640)
    seen = []

    def lines():
        for tmp in tmp_path.glob('*.tmp'):
            seen.append(tmp.stat().st_mode & 0o777)
        yield 'Host b'

    write_config_lines(p, lines())
    assert seen == [0o640]


def test_new_file_is_private(tmp_path):
    p = tmp_path / 'fresh'
    write_config_lines(p, ['Host a'])
    assert p.stat().st_mode & 0o777 == 0o600


def test_existing_tmp_named_file_untouched(tmp_path):
    p = tmp_path / 'config'
    p.write_text('Host a\n', encoding='utf-8')
    other = tmp_path / 'config.tmp'
    other.write_text('keep me\n', encoding='utf-8')
    write_config_lines(p, ['Host b'])
    assert other.read_text(encoding='utf-8') == 'keep me\n'


def test_failed_replace_cleans_up(monkeypatch, tmp_path):
    p = tmp_path / 'config'
    p.write_text('Host a\n', encoding='utf-8')

    def fail_replace(self, target):
        raise PermissionError(13, 'Permission denied')

    monkeypatch.setattr(Path, 'replace', fail_replace)
    with pytest.raises(PermissionError):
        write_config_lines(p, ['Host b'])
    assert p.read_text(encoding='utf-8') == 'Host a\n'
    assert list(tmp_path.glob('*.tmp')) == []
