import asyncio

import pytest
from aiohttp import web

RSS_SAMPLE = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
     xmlns:media="http://search.yahoo.com/mrss/"
     xmlns:content="http://purl.org/rss/1.0/modules/content/"
     xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel>
    <title>Example News</title>
    <link>https://news.example.com/</link>
    <item>
      <title>Media and enclosure</title>
      <link>https://news.example.com/a</link>
      <description>First &lt;b&gt;story&lt;/b&gt;</description>
      <pubDate>Mon, 03 Jun 2024 10:00:00 GMT</pubDate>
      <author>alice@example.com (Alice)</author>
      <category>World</category>
      <guid>https://news.example.com/a</guid>
      <media:content url="https://cdn.example.com/a-small.jpg" medium="image" width="50" height="50"/>
      <media:content url="https://cdn.example.com/a-main.jpg" medium="image" width="800" height="500"/>
      <media:content url="https://cdn.example.com/a-huge.jpg" medium="image" width="1600" height="1200"/>
      <enclosure url="https://cdn.example.com/a-enclosure.jpg" type="image/jpeg" length="1234"/>
    </item>
    <item>
      <title>Creator only</title>
      <link>https://news.example.com/b</link>
      <description><![CDATA[<p>Hello <img src="https://cdn.example.com/b.png" alt="b"></p>]]></description>
      <pubDate>Tue, 04 Jun 2024 11:30:00 GMT</pubDate>
      <dc:creator>Bob</dc:creator>
    </item>
    <item>
      <title>No image</title>
      <link>https://news.example.com/c</link>
      <description>Plain text only</description>
    </item>
  </channel>
</rss>
"""


@pytest.fixture
def rss_sample():
    return RSS_SAMPLE


@pytest.fixture
async def upstream(aiohttp_server):
    """Fake publisher serving feeds and failure modes."""

    async def feed(request):
        return web.Response(text=RSS_SAMPLE, content_type="application/rss+xml")

    async def broken(request):
        return web.Response(text="<rss><channel><item><title>x</channel>", content_type="text/xml")

    async def gb2312(request):
        text = (
            '<?xml version="1.0" encoding="GB2312"?>'
            "<rss><channel><item><title>新闻快讯</title></item></channel></rss>"
        )
        return web.Response(body=text.encode("gb2312"), content_type="application/rss+xml")

    async def missing(request):
        return web.Response(status=404, text="not here")

    async def forbidden(request):
        return web.Response(status=403, text="go away")

    async def unavailable(request):
        return web.Response(status=503, text="later")

    async def slow(request):
        await asyncio.sleep(2)
        return web.Response(text=RSS_SAMPLE, content_type="text/xml")

    async def echo_headers(request):
        return web.json_response({
            "user_agent": request.headers.get("User-Agent"),
            "accept": request.headers.get("Accept"),
        })

    app = web.Application()
    app.router.add_get("/feed.xml", feed)
    app.router.add_get("/broken.xml", broken)
    app.router.add_get("/gb2312.xml", gb2312)
    app.router.add_get("/missing.xml", missing)
    app.router.add_get("/forbidden.xml", forbidden)
    app.router.add_get("/unavailable.xml", unavailable)
    app.router.add_get("/slow.xml", slow)
    app.router.add_get("/headers", echo_headers)
    return await aiohttp_server(app)
