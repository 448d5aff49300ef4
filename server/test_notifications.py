from sync.notifications import NotificationEngine, evaluate


def chat(sender, message='hi'):
    return {'sender': sender, 'message': message}


def assignment():
    return {'action': 'station_assign'}


def test_admin_alerted_by_first_supervisor_message():
    result = evaluate('admin', [chat('supervisor')], 0, [], 0)

    assert result.chat_alert is True
    assert result.chat_count == 1


def test_admin_ignores_own_messages():
    result = evaluate('admin', [chat('admin'), chat('admin')], 0, [], 0)

    assert result.chat_alert is False
    assert result.chat_count == 0


def test_supervisor_alerted_by_admin_messages():
    result = evaluate('supervisor', [chat('supervisor'), chat('admin')], 0, [], 0)

    assert result.chat_alert is True
    assert result.chat_count == 1


def test_reevaluating_same_input_is_quiet():
    engine = NotificationEngine('admin')
    chats = [chat('supervisor')]

    assert engine.evaluate(chats, []).chat_alert is True
    assert engine.chat_watermark == 1
    assert engine.evaluate(chats, []).chat_alert is False
    assert engine.chat_watermark == 1


def test_assignment_alert_for_admin_only():
    activities = [assignment(), {'action': 'login'}]

    assert evaluate('admin', [], 0, activities, 0).activity_alert is True
    supervisor = evaluate('supervisor', [], 0, activities, 0)
    assert supervisor.activity_alert is False
    # the watermark still follows the assignment count
    assert supervisor.activity_count == 1


def test_unchanged_assignment_count_is_quiet():
    activities = [assignment(), assignment(), assignment()]

    assert evaluate('admin', [], 0, activities, 3).activity_alert is False


def test_watermark_follows_shrinking_counts():
    engine = NotificationEngine('admin')
    engine.evaluate([chat('supervisor'), chat('supervisor')], [])
    engine.evaluate([chat('supervisor')], [])

    assert engine.chat_watermark == 1
    assert engine.evaluate([chat('supervisor'), chat('supervisor')], []).chat_alert is True


def test_reset_clears_watermarks():
    engine = NotificationEngine('admin')
    engine.evaluate([chat('supervisor')], [assignment()])
    engine.reset()

    assert (engine.chat_watermark, engine.activity_watermark) == (0, 0)
