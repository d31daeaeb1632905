from datetime import date, datetime, time

import pandas as pd
import requests
import streamlit as st

from ui_kit import card, error_detail, monthly_df, set_page, sex_label, status_badge, to_df_growth


set_page()

API_BASE = st.sidebar.text_input("API Base URL", value="http://127.0.0.1:8001")
mode = st.sidebar.radio("Mode", ["Publik", "Admin"], horizontal=True)

st.title("Posyandu: Pemantauan Tumbuh Kembang Anak")
st.caption("Jadwal kegiatan, cek status gizi anak, dan pengelolaan data balita")


# -----------------------
# Helpers
# -----------------------
def api_get(path: str, params: dict | None = None):
    url = f"{API_BASE}{path}"
    try:
        r = requests.get(url, params=params, timeout=20)
        if r.status_code in (404, 422):
            return None
        r.raise_for_status()
        return r.json()
    except requests.RequestException as e:
        st.error(f"GET failed: {url}\n{e}")
        return None


def api_send(method: str, path: str, payload: dict | None = None):
    url = f"{API_BASE}{path}"
    try:
        r = requests.request(method, url, json=payload, timeout=30)
        r.raise_for_status()
        return r.json() if r.content else {}
    except requests.HTTPError as e:
        st.error(f"{method} failed: {url}\n{error_detail(e)}")
        return None
    except requests.RequestException as e:
        st.error(f"{method} failed: {url}\n{e}")
        return None


def activity_table(rows):
    if not rows:
        st.info("Belum ada kegiatan.")
        return
    df = pd.DataFrame(rows)
    df["scheduled_at"] = pd.to_datetime(df["scheduled_at"], errors="coerce")
    cols = ["scheduled_at", "title", "category", "posyandu", "location", "status"]
    st.dataframe(df[cols], use_container_width=True, hide_index=True)


def growth_view(child: dict) -> None:
    c1, c2, c3 = st.columns(3)
    c1.metric("Kode", child["code"])
    c2.metric("Jenis kelamin", sex_label(child.get("sex")))
    c3.metric("Status gizi", status_badge(child.get("nutrition_status")))

    points = api_get(f"/stats/growth/{child['id']}") or []
    df = to_df_growth(points)
    if df.empty:
        st.info("Belum ada data pemeriksaan.")
        return

    left, right = st.columns(2)
    with left:
        st.subheader("Berat badan (kg)")
        st.line_chart(df["weight_kg"])
    with right:
        st.subheader("Tinggi badan (cm)")
        st.line_chart(df["height_cm"])

    st.subheader("Riwayat pemeriksaan")
    show = ["age_months", "weight_kg", "height_cm", "arm_circumference_cm", "nutrition_status"]
    st.dataframe(df[show], use_container_width=True)


# -----------------------
# Public site
# -----------------------
def public_page() -> None:
    tabs = st.tabs(["Kegiatan", "Cek Anak", "Berita"])

    with tabs[0]:
        st.subheader("Kegiatan mendatang")
        activity_table(api_get("/activities/upcoming", {"limit": 10}))
        q = st.text_input("Cari kegiatan", key="activity_q")
        if q.strip():
            activity_table(api_get("/activities/search", {"q": q.strip()}))

    with tabs[1]:
        code = st.text_input("Kode balita (contoh: 20250113-AR-001)").strip()
        if code:
            parsed = api_get(f"/codes/parse/{code}")
            child = api_get(f"/children/by-code/{code}") if parsed else None
            if child is None:
                st.warning("Kode tidak ditemukan.")
            else:
                growth_view(child)

    with tabs[2]:
        for a in api_get("/articles/latest") or []:
            card(a["title"], f"<span class='muted small'>{a.get('published_on') or ''}</span><br>{a['body'][:400]}")
            st.write("")


# -----------------------
# Admin panel
# -----------------------
def admin_dashboard() -> None:
    stats = api_get("/stats/dashboard")
    if not stats:
        return
    m = st.columns(5)
    m[0].metric("Total balita", stats["total_children"])
    m[1].metric("Resiko stunting", stats["at_risk"], f"{stats['at_risk_pct']:.2f}%")
    m[2].metric("Normal", stats["normal"], f"{stats['normal_pct']:.2f}%")
    m[3].metric("Pemeriksaan", stats["total_measurements"])
    m[4].metric("Kegiatan", stats["total_activities"])

    year = st.number_input("Tahun", min_value=2000, max_value=2100, value=date.today().year, step=1)
    monthly = api_get(f"/stats/monthly/{int(year)}")
    reg = api_get(f"/stats/registrations/{int(year)}")
    avg = api_get(f"/stats/average-growth/{int(year)}")

    left, right = st.columns(2)
    with left:
        if monthly:
            st.subheader("Pemeriksaan & kegiatan per bulan")
            st.bar_chart(monthly_df(monthly["months"], pemeriksaan=monthly["measurements"], kegiatan=monthly["activities"]))
        dist = api_get("/stats/stunting-distribution")
        if dist:
            st.subheader("Resiko stunting per kelompok umur")
            st.bar_chart(pd.Series(dist["groups"], name="anak"))
    with right:
        if reg:
            st.subheader("Pendaftaran balita")
            st.line_chart(monthly_df(reg["months"], bulanan=reg["monthly_count"], kumulatif=reg["cumulative_count"]))
        if avg:
            st.subheader("Rata-rata BB / TB")
            st.line_chart(monthly_df(avg["months"], berat=avg["average_weight_kg"], tinggi=avg["average_height_cm"]))


def admin_children() -> None:
    with st.form("register_child"):
        st.subheader("Daftarkan balita")
        c1, c2 = st.columns(2)
        name = c1.text_input("Nama")
        sex = c2.selectbox("Jenis kelamin", ["Laki-laki", "Perempuan"])
        birth_date = c1.date_input("Tanggal lahir", value=date.today(), max_value=date.today())
        nik = c2.text_input("NIK")
        mother = c1.text_input("Nama ibu")
        father = c2.text_input("Nama ayah")
        bw = c1.number_input("Berat lahir (kg)", min_value=0.0, value=3.0, step=0.1)
        bh = c2.number_input("Panjang lahir (cm)", min_value=0.0, value=49.0, step=0.5)
        address = st.text_input("Alamat")
        posyandu = st.text_input("Posyandu")
        submitted = st.form_submit_button("Simpan")

    if submitted:
        out = api_send(
            "POST",
            "/children",
            {
                "name": name,
                "sex": sex,
                "birth_date": birth_date.isoformat(),
                "nik": nik or None,
                "mother_name": mother or None,
                "father_name": father or None,
                "birth_weight_kg": bw or None,
                "birth_height_cm": bh or None,
                "address": address or None,
                "posyandu": posyandu or None,
            },
        )
        if out:
            st.success(f"Tersimpan dengan kode {out['code']}")

    st.subheader("Data balita")
    status = st.selectbox("Filter status", ["Semua", "Normal", "Resiko Stunting"])
    rows = api_get("/children", None if status == "Semua" else {"status": status}) or []
    if rows:
        df = pd.DataFrame(rows)
        df["sex"] = df["sex"].map(sex_label)
        st.dataframe(
            df[["id", "code", "name", "sex", "birth_date", "posyandu", "nutrition_status", "stunting_risk_level"]],
            use_container_width=True,
            hide_index=True,
        )


def admin_measurements() -> None:
    code = st.text_input("Kode balita", key="measure_code").strip()
    if not code:
        return
    child = api_get(f"/children/by-code/{code}")
    if child is None:
        st.warning("Kode tidak ditemukan.")
        return
    st.markdown(f"**{child['name']}**, {sex_label(child['sex'])}, lahir {child['birth_date']}")

    with st.form("measurement"):
        c1, c2 = st.columns(2)
        measured_on = c1.date_input("Tanggal pemeriksaan", value=date.today())
        weight = c2.number_input("Berat badan (kg)", min_value=0.0, step=0.1)
        height = c1.number_input("Tinggi badan (cm)", min_value=0.0, step=0.5)
        lila = c2.number_input("LILA (cm, 0 jika tidak diukur)", min_value=0.0, step=0.1)
        head = c1.number_input("Lingkar kepala (cm)", min_value=0.0, step=0.1)
        notes = st.text_area("Catatan")
        submitted = st.form_submit_button("Simpan pemeriksaan")

    if submitted:
        out = api_send(
            "POST",
            f"/children/{child['id']}/measurements",
            {
                "measured_on": measured_on.isoformat(),
                "weight_kg": weight or None,
                "height_cm": height or None,
                "arm_circumference_cm": lila,
                "head_circumference_cm": head or None,
                "notes": notes or None,
            },
        )
        if out:
            st.success(f"Umur {out['age_months']} bulan, {status_badge(out['nutrition_status'])}")

    growth_view(api_get(f"/children/{child['id']}") or child)


def admin_activities() -> None:
    with st.form("activity"):
        st.subheader("Tambah kegiatan")
        c1, c2 = st.columns(2)
        title = c1.text_input("Judul")
        category = c2.selectbox(
            "Kategori",
            ["posyandu", "imunisasi", "edukasi", "pemeriksaan", "penyuluhan", "konseling", "pemantauan"],
        )
        day = c1.date_input("Tanggal", value=date.today())
        at = c2.time_input("Jam", value=time(8, 0))
        location = c1.text_input("Lokasi")
        posyandu = c2.text_input("Posyandu")
        description = st.text_area("Deskripsi")
        status = st.selectbox("Status", ["Terjadwal", "Berlangsung", "Selesai"])
        submitted = st.form_submit_button("Simpan")

    if submitted:
        out = api_send(
            "POST",
            "/activities",
            {
                "title": title,
                "category": category,
                "scheduled_at": datetime.combine(day, at).isoformat(),
                "location": location or None,
                "posyandu": posyandu or None,
                "description": description or None,
                "status": status,
            },
        )
        if out:
            st.success(f"Kegiatan #{out['id']} tersimpan")

    st.subheader("Semua kegiatan")
    activity_table(api_get("/activities"))


def admin_page() -> None:
    tabs = st.tabs(["Dashboard", "Balita", "Pemeriksaan", "Kegiatan"])
    with tabs[0]:
        admin_dashboard()
    with tabs[1]:
        admin_children()
    with tabs[2]:
        admin_measurements()
    with tabs[3]:
        admin_activities()


if mode == "Publik":
    public_page()
else:
    admin_page()
