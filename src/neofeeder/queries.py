"""neofeeder.queries

Declarative table of named feeder queries.

Each entry pre-binds a remote ``act`` and a filter built from typed clauses
(see :mod:`neofeeder.filters`), plus an optional fixed limit and order.
Entries with ``takes_limit`` accept the limit as their last argument.
Field names and action names follow the feeder's own (Indonesian) vocabulary.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Tuple

from .filters import AnyOf, Where, eq, fixed, ilike, like, num_eq
from .utils import digits_only, escape_literal, quoted_text, search_text, strict_token

__all__ = ["NamedQuery", "QUERIES", "get_query"]

ACTIVE = fixed("nama_status_mahasiswa", "AKTIF")


@dataclass(frozen=True)
class NamedQuery:
    name: str
    act: str
    where: Where = field(default_factory=Where)
    limit: str = ""
    order: str = ""
    takes_limit: bool = False
    doc: str = ""

    @property
    def args(self) -> Tuple[str, ...]:
        names = self.where.args
        if self.takes_limit:
            names += ("limit",)
        return names

    def bind(self, *args: Any, **kwargs: Any) -> Dict[str, Any]:
        """Map positional/keyword arguments onto :attr:`args`."""
        names = self.args
        if len(args) > len(names):
            raise TypeError(
                f"{self.name}() takes {len(names)} arguments but {len(args)} were given"
            )
        params = dict(zip(names, args))
        for key, value in kwargs.items():
            if key not in names:
                raise TypeError(f"{self.name}() got an unexpected argument '{key}'")
            if key in params:
                raise TypeError(f"{self.name}() got multiple values for argument '{key}'")
            params[key] = value
        missing = [n for n in names if n not in params]
        if missing:
            raise TypeError(f"{self.name}() missing arguments: {', '.join(missing)}")
        return params

    def build(self, *args: Any, **kwargs: Any) -> Tuple[str, str, Any, str, str]:
        """Return ``(act, filter, limit, offset, order)`` ready for ``run_ws``."""
        params = self.bind(*args, **kwargs)
        limit = params["limit"] if self.takes_limit else self.limit
        return self.act, self.where.render(params), limit, "", self.order


def _table(entries: Iterable[NamedQuery]) -> Mapping[str, NamedQuery]:
    table: Dict[str, NamedQuery] = {}
    for q in entries:
        if q.name in table:
            raise ValueError(f"duplicate named query: {q.name}")
        table[q.name] = q
    return table


QUERIES: Mapping[str, NamedQuery] = _table([
    # ── institution and regions ────────────────────────────────────
    NamedQuery("get_profil_pt", "GetProfilPT", doc="Profile of the active institution."),
    NamedQuery(
        "get_profil_pt_by_name", "GetAllPT",
        Where(like("nama_perguruan_tinggi", "nama", escape_literal)),
        limit="10",
    ),
    NamedQuery(
        "get_id_wilayah", "GetWilayah",
        Where(ilike("nama_wilayah", "nama", escape_literal)),
        limit="5",
        doc="Regions whose name contains the given fragment.",
    ),
    NamedQuery(
        "get_id_wilayah_by_id", "GetWilayah",
        Where(eq("id_wilayah", "id_wilayah")),
        limit="5",
    ),
    NamedQuery(
        "get_kategori_kegiatan", "GetKategoriKegiatan",
        Where(like("nama_kategori_kegiatan", "nama", escape_literal)),
        limit="10",
    ),

    # ── student counts ─────────────────────────────────────────────
    NamedQuery(
        "jml_sts_mhs", "GetCountPerkuliahanMahasiswa",
        Where(
            eq("id_prodi", "id_prodi"),
            eq("id_semester", "id_semester"),
            eq("id_status_mahasiswa", "id_status_mahasiswa"),
        ),
    ),
    NamedQuery(
        "jml_mhs_by_agama", "GetCountMahasiswa",
        Where(eq("id_periode", "id_periode"), eq("id_agama", "id_agama")),
    ),
    NamedQuery(
        "jml_mhs_by_jns_keluar", "GetCountMahasiswa",
        Where(eq("id_periode", "id_periode"), eq("nama_status_mahasiswa", "status")),
    ),
    NamedQuery(
        "jml_mhs_by_lp", "GetCountMahasiswa",
        Where(ACTIVE, eq("jenis_kelamin", "jenis_kelamin")),
        doc="Active students of one sex (L/P).",
    ),
    NamedQuery(
        "jml_mhs_aktif", "GetCountMahasiswa",
        Where(eq("nama_status_mahasiswa", "status")),
    ),
    NamedQuery(
        "jml_mhs_aktif_by_periode", "GetCountMahasiswa",
        Where(eq("id_periode", "id_periode"), eq("nama_status_mahasiswa", "status")),
    ),
    NamedQuery(
        "get_penugasan_dsn_prodi", "GetCountPenugasanSemuaDosen",
        Where(eq("id_tahun_ajaran", "id_tahun_ajaran"), eq("id_prodi", "id_prodi")),
    ),
    NamedQuery(
        "count_kls_prodi", "GetCountKelasKuliahWs",
        Where(eq("id_prodi", "id_prodi"), eq("id_semester", "id_semester")),
    ),
    NamedQuery(
        "cek_akm_by_smt", "GetCountPerkuliahanMahasiswa",
        Where(
            eq("id_registrasi_mahasiswa", "id_registrasi_mahasiswa"),
            eq("id_semester", "id_semester"),
        ),
    ),

    # ── student records ────────────────────────────────────────────
    NamedQuery(
        "get_mhs_by_nim", "GetDataLengkapMahasiswaProdi",
        Where(eq("nim", "nim", digits_only)),
    ),
    NamedQuery(
        "get_mhs_by_nim_lim", "GetDataLengkapMahasiswaProdi",
        Where(eq("nim", "nim", digits_only), ACTIVE),
        takes_limit=True,
    ),
    NamedQuery(
        "search_mhs_by_nim_lim", "GetDataLengkapMahasiswaProdi",
        Where(like("nim", "nim", digits_only), ACTIVE),
        takes_limit=True,
    ),
    NamedQuery(
        "search_mhs_by_nim_lim_all", "GetDataLengkapMahasiswaProdi",
        Where(like("nim", "nim", digits_only)),
        takes_limit=True,
        doc="Like search_mhs_by_nim_lim but without the active-status restriction.",
    ),
    NamedQuery(
        "get_mhs_by_nama", "GetDataLengkapMahasiswaProdi",
        Where(like("nama_mahasiswa", "nama", search_text), ACTIVE),
    ),
    NamedQuery(
        "get_mhs_by_nama_lim", "GetDataLengkapMahasiswaProdi",
        Where(like("nama_mahasiswa", "nama", search_text), ACTIVE),
        takes_limit=True,
    ),
    NamedQuery(
        "get_mhs_by_id_regis", "GetDataLengkapMahasiswaProdi",
        Where(eq("id_registrasi_mahasiswa", "id_registrasi_mahasiswa")),
    ),
    NamedQuery(
        "get_mhs_by_prodi_ang", "GetDataLengkapMahasiswaProdi",
        Where(eq("id_prodi", "id_prodi"), eq("id_periode_masuk", "angkatan")),
    ),
    NamedQuery(
        "get_biodata_mhs", "GetDataLengkapMahasiswaProdi",
        Where(
            like("nama_mahasiswa", "nama", quoted_text),
            like("nama_ibu_kandung", "nama_ibu", quoted_text),
        ),
        doc="Students by name and mother's maiden name.",
    ),
    NamedQuery(
        "get_mhs_lls_do_by_prod_smt", "GetListMahasiswaLulusDO",
        Where(eq("id_prodi", "id_prodi"), eq("id_periode_keluar", "periode_keluar")),
    ),
    NamedQuery(
        "get_riwayat_pendidikan_mhs", "GetListRiwayatPendidikanMahasiswa",
        Where(eq("id_registrasi_mahasiswa", "id_registrasi_mahasiswa")),
    ),
    NamedQuery(
        "get_riwayat_mhs", "GetListRiwayatPendidikanMahasiswa",
        Where(eq("id_mahasiswa", "id_mahasiswa")),
    ),

    # ── study activity (AKM) ───────────────────────────────────────
    NamedQuery(
        "get_kuliah_mhs", "GetDetailPerkuliahanMahasiswa",
        Where(eq("id_registrasi_mahasiswa", "id_registrasi_mahasiswa")),
        order="id_semester desc",
    ),
    NamedQuery(
        "get_ak_mhs_by_reg", "GetAktivitasKuliahMahasiswa",
        Where(eq("id_registrasi_mahasiswa", "id_registrasi_mahasiswa")),
        order="id_semester desc",
    ),
    NamedQuery(
        "get_ak_mhs_by_reg_asc", "GetAktivitasKuliahMahasiswa",
        Where(eq("id_registrasi_mahasiswa", "id_registrasi_mahasiswa")),
        order="id_semester asc",
    ),
    NamedQuery(
        "get_ak_aktif_mhs_by_reg", "GetAktivitasKuliahMahasiswa",
        Where(
            eq("id_registrasi_mahasiswa", "id_registrasi_mahasiswa"),
            fixed("id_status_mahasiswa", "A"),
        ),
        order="id_semester desc",
    ),
    NamedQuery(
        "get_aktivitas_kuliah_mhs", "GetAktivitasKuliahMahasiswa",
        Where(eq("id_registrasi_mahasiswa", "id_registrasi_mahasiswa")),
        order="id_semester desc",
    ),
    NamedQuery(
        "get_akm_by_smt", "GetAktivitasKuliahMahasiswa",
        Where(
            eq("id_registrasi_mahasiswa", "id_registrasi_mahasiswa"),
            eq("id_semester", "id_semester"),
        ),
        order="id_semester desc",
    ),

    # ── KRS (course enrollment) ────────────────────────────────────
    NamedQuery(
        "get_all_krs_mhs", "GetKRSMahasiswa",
        Where(eq("id_registrasi_mahasiswa", "id_registrasi_mahasiswa")),
        order="id_periode asc",
    ),
    NamedQuery(
        "get_krs_mhs_by_smt", "GetKRSMahasiswa",
        Where(
            eq("id_registrasi_mahasiswa", "id_registrasi_mahasiswa"),
            eq("id_periode", "id_periode"),
        ),
    ),

    # ── grades and transcripts ─────────────────────────────────────
    NamedQuery(
        "get_nilai_transfer_pendidikan_mhs", "GetNilaiTransferPendidikanMahasiswa",
        Where(eq("id_registrasi_mahasiswa", "id_registrasi_mahasiswa")),
    ),
    NamedQuery(
        "get_nilai_tf_by_prod_ang", "GetNilaiTransferPendidikanMahasiswa",
        Where(eq("id_prodi", "id_prodi"), eq("id_periode_masuk", "angkatan")),
    ),
    NamedQuery(
        "get_list_konversi_kampus_merdeka", "GetListKonversiKampusMerdeka",
        Where(eq("nim", "nim")),
    ),
    NamedQuery(
        "get_transkrip_mhs", "GetTranskripMahasiswa",
        Where(eq("id_registrasi_mahasiswa", "id_registrasi_mahasiswa")),
    ),
    NamedQuery(
        "get_nilai_transkrip", "GetTranskripMahasiswa",
        Where(
            eq("id_registrasi_mahasiswa", "id_registrasi_mahasiswa"),
            eq("id_matkul", "id_matkul"),
        ),
    ),
    NamedQuery(
        "nilai_by_kls_nim", "GetDetailNilaiPerkuliahanKelas",
        Where(eq("id_kelas_kuliah", "id_kelas_kuliah"), eq("nim", "nim")),
        order="nim asc",
    ),
    NamedQuery(
        "nilai_by_kls_idreg", "GetDetailNilaiPerkuliahanKelas",
        Where(
            eq("id_kelas_kuliah", "id_kelas_kuliah"),
            eq("id_registrasi_mahasiswa", "id_registrasi_mahasiswa"),
        ),
    ),
    NamedQuery(
        "get_nilai_mhs", "GetRiwayatNilaiMahasiswa",
        Where(eq("id_registrasi_mahasiswa", "id_registrasi_mahasiswa")),
        order="id_periode",
    ),
    NamedQuery(
        "get_nilai_by_idreg_and_idsmt", "GetDetailNilaiPerkuliahanKelas",
        Where(
            eq("id_registrasi_mahasiswa", "id_registrasi_mahasiswa"),
            eq("id_semester", "id_semester"),
        ),
    ),

    # ── curriculum and classes ─────────────────────────────────────
    NamedQuery(
        "get_mk_kur_by_nama", "GetMatkulKurikulum",
        Where(eq("id_prodi", "id_prodi"), like("nama_mata_kuliah", "nama", strict_token)),
        limit="10",
        order="id_semester desc",
    ),
    NamedQuery(
        "get_kelas_kuliah", "GetDetailKelasKuliah",
        Where(eq("id_prodi", "id_prodi"), eq("id_semester", "id_semester")),
    ),
    NamedQuery(
        "get_det_kelas_kuliah", "GetDetailKelasKuliah",
        Where(eq("id_kelas_kuliah", "id_kelas_kuliah")),
    ),
    NamedQuery(
        "get_mk", "GetDetailMataKuliah",
        Where(like("nama_mata_kuliah", "nama", search_text)),
    ),
    NamedQuery(
        "get_mk_kur_mhs", "GetMatkulKurikulum",
        Where(eq("id_matkul", "id_matkul")),
        limit="1",
        order="id_semester desc",
        doc="Most recent curriculum entry for a course.",
    ),
    NamedQuery(
        "get_mk_kur", "GetMatkulKurikulum",
        Where(eq("id_matkul", "id_matkul")),
        order="tgl_create desc",
    ),
    NamedQuery(
        "get_mk_kur_by_kur", "GetMatkulKurikulum",
        Where(eq("id_kurikulum", "id_kurikulum"), eq("id_matkul", "id_matkul")),
        order="tgl_create desc",
    ),

    # ── student activities ─────────────────────────────────────────
    NamedQuery(
        "get_aktivitas_by_prod_smt", "GetListAktivitasMahasiswa",
        Where(eq("id_prodi", "id_prodi"), eq("id_semester", "id_semester")),
        order="id_semester desc",
    ),
    NamedQuery(
        "get_aktivitas_by_name", "GetListAktivitasMahasiswa",
        Where(like("judul", "judul", escape_literal)),
        order="id_semester desc",
        takes_limit=True,
    ),
    NamedQuery(
        "get_anggota_by_name", "GetListAnggotaAktivitasMahasiswa",
        Where(eq("id_aktivitas", "id_aktivitas"), like("nama_mahasiswa", "nama", escape_literal)),
        takes_limit=True,
    ),

    # ── lecturers ──────────────────────────────────────────────────
    NamedQuery(
        "get_dosen_by_nama", "DetailBiodataDosen",
        Where(like("nama_dosen", "nama", search_text)),
        limit="10",
    ),
    NamedQuery(
        "get_dosen_by_nidn", "DetailBiodataDosen",
        Where(eq("nidn", "nidn")),
    ),
    NamedQuery(
        "get_dosen_by_nidn_nuptk", "DetailBiodataDosen",
        AnyOf(eq("nidn", "nidn"), eq("nuptk", "nidn")),
        doc="Lecturer whose NIDN or NUPTK equals the given number.",
    ),
    NamedQuery(
        "get_dosen_by_id", "DetailBiodataDosen",
        Where(eq("id_dosen", "id_dosen")),
    ),
    NamedQuery(
        "get_tgs_dosen_smt", "GetListPenugasanDosen",
        Where(eq("nidn", "nidn"), num_eq("id_tahun_ajaran", "id_tahun_ajaran")),
    ),
    NamedQuery(
        "get_penugasan_dosen", "GetDetailPenugasanDosen",
        Where(eq("id_dosen", "id_dosen")),
    ),
    NamedQuery(
        "get_penugasan_dosen_smt", "GetDetailPenugasanDosen",
        Where(eq("id_dosen", "id_dosen"), num_eq("id_tahun_ajaran", "id_tahun_ajaran")),
    ),
    NamedQuery(
        "get_riwayat_pangkat_dosen", "GetRiwayatPangkatDosen",
        Where(eq("id_dosen", "id_dosen")),
    ),
    NamedQuery(
        "get_riwayat_pendidikan_dosen", "GetRiwayatPendidikanDosen",
        Where(eq("id_dosen", "id_dosen")),
    ),
    NamedQuery(
        "get_riwayat_fungsional_dosen", "GetRiwayatFungsionalDosen",
        Where(eq("id_dosen", "id_dosen")),
    ),
    NamedQuery(
        "get_riwayat_sertifikasi_dosen", "GetRiwayatSertifikasiDosen",
        Where(eq("id_dosen", "id_dosen")),
    ),
    NamedQuery(
        "get_riwayat_penelitian_dosen", "GetRiwayatPenelitianDosen",
        Where(eq("id_dosen", "id_dosen")),
    ),
    NamedQuery(
        "get_mahasiswa_bimbingan_dosen", "GetMahasiswaBimbinganDosen",
        Where(eq("id_dosen", "id_dosen")),
    ),
    NamedQuery(
        "get_kelas_mengajar_dosen", "GetDosenPengajarKelasKuliah",
        Where(eq("id_dosen", "id_dosen"), eq("id_semester", "id_semester")),
    ),
    NamedQuery(
        "get_dosen_kelas", "GetDosenPengajarKelasKuliah",
        Where(eq("id_kelas_kuliah", "id_kelas_kuliah")),
    ),
    NamedQuery(
        "get_aktivitas_mengajar_dosen", "GetAktivitasMengajarDosen",
        Where(eq("id_dosen", "id_dosen")),
    ),
])


def get_query(name: str) -> NamedQuery:
    try:
        return QUERIES[name]
    except KeyError:
        raise KeyError(f"unknown named query: {name}") from None
