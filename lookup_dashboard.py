# ============================================================
# 🌐 Unruggable Lookup Dashboard
# Name -> verifier + gateways, with gateway health
# ============================================================

import pandas as pd
import streamlit as st

from gateway_probe import probe_gateways
from known_names import KNOWN_NAMES
from lookup_errors import MalformedEncodingError, NoResolverFoundError, RegistryUnavailableError
from registry import build_registry
from settings import load_settings
from unruggable_finder import UnruggableFinder


def format_address(addr: str):
    if len(addr) < 12:
        return addr
    return f"{addr[:6]}...{addr[-4:]}"


def gateway_table(gateways, probes=None):
    rows = []
    for i, url in enumerate(gateways):
        row = {"#": i + 1, "Gateway": url}
        if probes:
            probe = probes[i]
            row["Status"] = "🟢 up" if probe["ok"] else "🔴 down"
            row["HTTP"] = probe["status"] if probe["status"] is not None else "—"
            row["Latency (ms)"] = probe["latency_ms"] if probe["latency_ms"] is not None else "—"
        rows.append(row)
    return pd.DataFrame(rows)


def render_result(name, verifier, gateways, probe=False):
    st.success(f"✅ {name} -> {verifier}")
    st.markdown(f"**Verifier**: `{verifier}` ({format_address(verifier)})")
    if not gateways:
        st.info("📭 No gateways configured for this verifier")
        return
    probes = probe_gateways(gateways) if probe else None
    st.markdown("### 🛰️ Gateways")
    st.dataframe(gateway_table(gateways, probes))


def main():
    st.set_page_config(page_title="Unruggable Lookup", layout="wide")
    st.title("🌐 Unruggable Lookup — verifier & gateways")

    try:
        finder = UnruggableFinder(build_registry(load_settings()))
    except RuntimeError as e:
        st.error(f"❌ {e}")
        st.stop()
        return

    options = list(KNOWN_NAMES.keys())
    sel = st.selectbox("Choose a known name (or 'Manual input')", options)
    meta = KNOWN_NAMES[sel]
    if meta["status"] == "manual":
        name = st.text_input("ENS name", "")
    else:
        name = st.text_input("ENS name (editable)", meta["name"])
        st.markdown(f"**Source**: {meta['source']} ({meta['status']})")
    probe = st.checkbox("Probe gateways", value=False)

    if not st.button("Find"):
        return

    name = name.strip()
    if not name:
        st.error("Please enter a name.")
        st.stop()
        return

    st.info(f"🔍 Resolving {name} ...")
    try:
        verifier, gateways = finder.find(name)
    except MalformedEncodingError as e:
        st.error(f"❌ Invalid name: {e}")
    except NoResolverFoundError:
        st.warning(f"⚠️ No unruggable verifier registered for {name}.")
    except RegistryUnavailableError as e:
        st.error(f"❌ Registry unavailable, try again later: {e}")
    else:
        render_result(name, verifier, gateways, probe=probe)


if __name__ == "__main__":
    main()
