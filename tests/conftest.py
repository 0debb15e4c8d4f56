"""Shared fixtures: minimal OOXML packages built with zipfile."""

import zipfile
from pathlib import Path

import pytest

CORE_NS_DECLS = (
    'xmlns:cp="http://schemas.openxmlformats.org/package/2006/metadata/core-properties" '
    'xmlns:dc="http://purl.org/dc/elements/1.1/" '
    'xmlns:dcterms="http://purl.org/dc/terms/" '
    'xmlns:dcmitype="http://purl.org/dc/dcmitype/" '
    'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"'
)

CORE_XML = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<cp:coreProperties {CORE_NS_DECLS}>
  <dc:title>Quarterly Report</dc:title>
  <dc:creator>Jane Doe</dc:creator>
  <cp:keywords>finance, q3</cp:keywords>
  <cp:lastModifiedBy>John Roe</cp:lastModifiedBy>
  <cp:revision>3</cp:revision>
  <dcterms:created xsi:type="dcterms:W3CDTF">2023-05-01T08:00:00Z</dcterms:created>
  <dcterms:modified xsi:type="dcterms:W3CDTF">2023-05-02T09:30:00Z</dcterms:modified>
  <cp:contentStatus>Draft</cp:contentStatus>
</cp:coreProperties>"""

APP_XML = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\r\n'
    '<Properties xmlns="http://schemas.openxmlformats.org/officeDocument/2006/extended-properties" '
    'xmlns:vt="http://schemas.openxmlformats.org/officeDocument/2006/docPropsVTypes">'
    "<Template>Normal.dotm</Template><TotalTime>42</TotalTime><Pages>1</Pages>"
    "<Words>5</Words><Application>Microsoft Office Word</Application>"
    "<DocSecurity>0</DocSecurity></Properties>"
)

DOCUMENT_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">
  <w:body><w:p><w:r><w:t>Hello world</w:t></w:r></w:p></w:body>
</w:document>"""

CONTENT_TYPES_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">
  <Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>
  <Default Extension="xml" ContentType="application/xml"/>
  <Override PartName="/word/document.xml" ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>
  <Override PartName="/docProps/core.xml" ContentType="application/vnd.openxmlformats-package.core-properties+xml"/>
  <Override PartName="/docProps/app.xml" ContentType="application/vnd.openxmlformats-officedocument.extended-properties+xml"/>
</Types>"""

ROOT_RELS_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
  <Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument" Target="word/document.xml"/>
  <Relationship Id="rId2" Type="http://schemas.openxmlformats.org/package/2006/relationships/metadata/core-properties" Target="docProps/core.xml"/>
  <Relationship Id="rId3" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/extended-properties" Target="docProps/app.xml"/>
</Relationships>"""

DOC_RELS_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
</Relationships>"""


def build_package(
    path: Path,
    core: str | None = CORE_XML,
    app: str | None = APP_XML,
    extra: dict[str, str | bytes] | None = None,
) -> Path:
    """Write a minimal .docx-shaped package; pass None to leave a stream out."""
    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("[Content_Types].xml", CONTENT_TYPES_XML)
        zf.writestr("_rels/.rels", ROOT_RELS_XML)
        zf.writestr("word/document.xml", DOCUMENT_XML)
        zf.writestr("word/_rels/document.xml.rels", DOC_RELS_XML)
        if core is not None:
            zf.writestr("docProps/core.xml", core)
        if app is not None:
            zf.writestr("docProps/app.xml", app)
        for name, data in (extra or {}).items():
            zf.writestr(name, data)
    return path


def read_entry(path: Path, name: str) -> bytes:
    with zipfile.ZipFile(path) as zf:
        return zf.read(name)


@pytest.fixture
def docx_path(tmp_path: Path) -> Path:
    """A .docx with core.xml and app.xml."""
    return build_package(tmp_path / "report.docx")


@pytest.fixture
def xlsx_path(tmp_path: Path) -> Path:
    """An .xlsx-named package; it also carries app.xml so tests can prove it is not read."""
    return build_package(tmp_path / "book.xlsx")


@pytest.fixture
def no_app_docx_path(tmp_path: Path) -> Path:
    """A .docx without docProps/app.xml."""
    return build_package(tmp_path / "no_app.docx", app=None)


@pytest.fixture
def no_core_docx_path(tmp_path: Path) -> Path:
    """A .docx without docProps/core.xml."""
    return build_package(tmp_path / "no_core.docx", core=None)
