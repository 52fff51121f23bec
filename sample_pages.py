"""
HTML fixtures shaped like antdv.com component and overview pages, shared by the tests.
"""

BUTTON_URL = "https://antdv.com/components/button-cn"
AFFIX_URL = "https://antdv.com/components/affix-cn"

BUTTON_PAGE = """
<html>
<head><title>Button 按钮 - Ant Design Vue</title><style>.x { color: red }</style></head>
<body>
<h1>Button 按钮</h1>
<p>按钮用于开始一个即时操作。</p>
<pre><code>&lt;a-button type="primary"&gt;Primary&lt;/a-button&gt;</code></pre>
<h2>API</h2>
<p>通过设置 Button 的属性来产生不同的按钮样式。</p>
<table>
  <thead>
    <tr><th>属性</th><th>说明</th><th>类型</th><th>默认值</th><th>版本</th></tr>
  </thead>
  <tbody>
    <tr><td>size</td><td>设置按钮大小</td><td>'large' | 'middle' | 'small'</td><td>middle</td><td></td></tr>
    <tr><td>type</td><td>设置按钮类型</td><td>"primary" | "dashed" | 'link'</td><td>default</td><td>1.0</td></tr>
    <tr><td>disabled</td><td>按钮失效状态</td><td>boolean</td><td>false</td><td></td></tr>
    <tr><td>-</td><td>placeholder row</td><td></td><td></td><td></td></tr>
  </tbody>
</table>
<h3>事件</h3>
<table>
  <tr><th>事件名称</th><th>说明</th><th>回调参数</th></tr>
  <tr><td>click</td><td>点击按钮时的回调</td><td>(event) => void</td></tr>
</table>
<h3>插槽</h3>
<p>No slots table here.</p>
<h3>方法</h3>
<div class="note">Methods follow.</div>
<table>
  <tr><th>名称</th><th>描述</th></tr>
  <tr><td>blur()</td><td>移除焦点</td></tr>
  <tr><td>focus()</td><td>获取焦点</td></tr>
</table>
<script>window.__DATA__ = {"secret": "not text"}</script>
</body>
</html>
"""

BUTTON_PAGE_CHANGED = """
<html>
<head><title>Button 按钮</title></head>
<body>
<h1>Button 按钮</h1>
<h2>API</h2>
<table>
  <thead><tr><th>参数</th><th>说明</th><th>类型</th><th>默认值</th></tr></thead>
  <tbody>
    <tr><td>shape</td><td>设置按钮形状</td><td>'circle' | 'round'</td><td>-</td></tr>
  </tbody>
</table>
</body>
</html>
"""

AFFIX_PAGE = """
<html>
<head><title>Affix 固钉</title></head>
<body>
<h1>Affix 固钉</h1>
<h2>API</h2>
<table>
  <thead><tr><th>Property</th><th>Description</th><th>Type</th><th>Default</th><th>Required</th></tr></thead>
  <tbody>
    <tr><td>offsetTop</td><td>距离窗口顶部达到指定偏移量后触发</td><td>number</td><td>0</td><td>no</td></tr>
    <tr><td>target</td><td>设置 Affix 需要监听其滚动事件的元素</td><td>() => HTMLElement</td><td></td><td>yes</td></tr>
  </tbody>
</table>
</body>
</html>
"""

NO_TAG_URL = "https://antdv.com/docs/vue/introduce-cn"

NO_TAG_PAGE = """
<html><head><title>Introduce</title></head>
<body><h1>Ant Design Vue</h1><p>No component here.</p></body></html>
"""

OVERVIEW_PAGE = """
<html><body>
<nav>
  <a href="/components/overview-cn">组件总览</a>
  <a href="/components/button-cn">Button 按钮</a>
  <a href="/components/affix-cn/">Affix 固钉</a>
  <a href="/components/button-cn">Button 按钮</a>
  <a href="https://antdv.com/components/table-cn">Table 表格</a>
  <a href="/components/icon">Icon</a>
  <a href="/components/empty-cn"></a>
  <a href="/docs/vue/introduce-cn">介绍</a>
</nav>
</body></html>
"""
