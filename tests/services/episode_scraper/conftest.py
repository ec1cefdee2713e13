import pytest

INDEX_HTML = """
<html><body>
<div class="mw-parser-output">
  <h2 id="Episodes">Episodes</h2>
  <table class="wikitable">
    <tr><th>No.</th><th>Air date</th><th>Title</th></tr>
    <tr><td> 1 </td><td>April 22, 2025</td><td><a href="/wiki/One_Year_Later">"One Year Later"</a></td></tr>
    <tr><td>2</td><td>April 22, 2025</td><td><a href="/wiki/Sagrona_Teema">"Sagrona Teema"</a></td></tr>
    <tr><td>3</td><td>April 22, 2025</td><td>"Harvest"</td></tr>
    <tr><td>4</td><td>April 29, 2025</td></tr>
  </table>
</div>
</body></html>
"""

EPISODE_HTML = """
<html><body>
<div class="mw-parser-output">
  <p>"One Year Later" is the first episode of the second season.</p>
  <h2>Plot Summary</h2>
  <h3>Catalyst</h3>
  <p>Cassian escapes.</p>
  <h2>Credits</h2>
  <h3>Cast</h3>
  <p>Diego Luna as Cassian Andor</p>
</div>
</body></html>
"""


@pytest.fixture
def index_html() -> str:
    return INDEX_HTML


@pytest.fixture
def episode_html() -> str:
    return EPISODE_HTML
