"""集成测试包。

集成测试特点：
- 需要真实的 PostgreSQL（通过 Docker）
- 验证仓储的排序、过滤与可见性规则
- 使用事务回滚保持隔离

运行方式：
    # 先启动数据库并创建测试库
    docker-compose up -d postgres
    python scripts/create_test_db.py --database news_events_test

    # 运行集成测试
    uv run pytest tests/integration/ -v -m integration
"""
