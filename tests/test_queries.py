import pytest

from neofeeder.queries import QUERIES, get_query


def test_table_covers_the_feeder_surface():
    assert len(QUERIES) >= 60
    acts = {q.act for q in QUERIES.values()}
    for act in ("GetProfilPT", "GetWilayah", "GetDataLengkapMahasiswaProdi",
                "GetKRSMahasiswa", "GetTranskripMahasiswa", "DetailBiodataDosen",
                "GetListMahasiswaLulusDO"):
        assert act in acts


def test_every_interpolated_value_has_a_sanitizer():
    for q in QUERIES.values():
        for clause in q.where.clauses:
            if clause.arg is not None:
                assert clause.sanitizer is not None, (q.name, clause.field)


def test_build_strict_two_args():
    act, filter, limit, offset, order = get_query("jml_sts_mhs").build("p-1", "20231;", "A")
    assert act == "GetCountPerkuliahanMahasiswa"
    assert filter == "id_prodi = 'p-1' and id_semester = '20231' and id_status_mahasiswa = 'A'"
    assert (limit, offset, order) == ("", "", "")


def test_build_fixed_limit_and_order():
    q = get_query("get_mk_kur_mhs")
    assert q.build("mk-9") == ("GetMatkulKurikulum", "id_matkul = 'mk-9'", "1", "", "id_semester desc")


def test_build_caller_limit():
    q = get_query("get_mhs_by_nim_lim")
    assert q.args == ("nim", "limit")
    act, filter, limit, _, _ = q.build("2021.01", 5)
    assert filter == "nim = '202101' and nama_status_mahasiswa = 'AKTIF'"
    assert limit == 5


def test_build_keywords():
    q = get_query("get_biodata_mhs")
    _, filter, _, _, _ = q.build(nama_ibu="Siti  O'Hara", nama="Budi")
    assert filter == "nama_mahasiswa like '%Budi%' and nama_ibu_kandung like '%Siti O''Hara%'"


def test_unquoted_academic_year():
    _, filter, _, _, _ = get_query("get_tgs_dosen_smt").build("0012", "2023 or 1=1")
    assert filter == "nidn = '0012' and id_tahun_ajaran = 2023or11"


def test_anggota_activity_id_is_sanitized():
    _, filter, limit, _, _ = get_query("get_anggota_by_name").build("a1' or '1", "Rina", "3")
    assert filter == "id_aktivitas = 'a1or1' and nama_mahasiswa like '%Rina%'"
    assert limit == "3"


def test_bind_errors():
    q = get_query("get_dosen_by_nidn")
    with pytest.raises(TypeError):
        q.bind()
    with pytest.raises(TypeError):
        q.bind("1", "2")
    with pytest.raises(TypeError):
        q.bind(nim="1")
    with pytest.raises(TypeError):
        q.bind("1", nidn="2")


def test_unknown_query():
    with pytest.raises(KeyError):
        get_query("no_such_query")
